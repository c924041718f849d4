"""Result processing utilities for entity detection results.

Handles deduplication of RecognizerResult objects.
"""


def deduplicate_results(results, text: str):
    """
    Remove duplicate/overlapping entity detections.
    Keeps only the highest-scoring result for overlapping spans; on equal
    scores the longer span wins.

    Args:
        results: List of RecognizerResult objects
        text: The original text

    Returns:
        List of deduplicated RecognizerResult objects, ordered by start
    """
    if not results:
        return results

    sorted_results = sorted(results, key=lambda x: (-x.score, -(x.end - x.start), x.start))

    covered_positions = set()
    deduplicated = []

    for result in sorted_results:
        result_positions = set(range(result.start, result.end))
        if result_positions & covered_positions:
            # Overlaps with a higher-ranked result
            continue

        deduplicated.append(result)
        covered_positions.update(result_positions)

    deduplicated.sort(key=lambda x: x.start)
    return deduplicated
