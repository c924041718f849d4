"""Phone number anonymizers.

PhoneNumberAnonymizer is the default: it recognizes international calling
codes from a prefix table. NanpPhoneAnonymizer is the legacy regional
variant that assumes a 10-digit North American national number.
"""

from functools import partial

from fpe import DIGITS

from .base import AnonymizerKind, BaseAnonymizer, as_bool, as_int

FILLER = "X"
NANP_NATIONAL_LENGTH = 10
NANP_AREA_CODE_LENGTH = 3

# Calling codes. No code is a prefix of another, so the first match by
# length (3, then 2, then 1 digits) is unambiguous.
COUNTRY_CODES: dict[str, str] = {
    # 3-digit codes
    "351": "Portugal", "352": "Luxembourg", "353": "Ireland", "354": "Iceland",
    "355": "Albania", "356": "Malta", "357": "Cyprus", "358": "Finland",
    "359": "Bulgaria", "370": "Lithuania", "371": "Latvia", "372": "Estonia",
    "373": "Moldova", "374": "Armenia", "375": "Belarus", "380": "Ukraine",
    "381": "Serbia", "385": "Croatia", "386": "Slovenia", "420": "Czech Republic",
    "421": "Slovakia", "670": "East Timor", "672": "Antarctica", "673": "Brunei",
    "674": "Nauru", "675": "Papua New Guinea", "676": "Tonga", "677": "Solomon Islands",
    "678": "Vanuatu", "679": "Fiji", "680": "Palau", "682": "Cook Islands",
    "683": "Niue", "685": "Samoa", "686": "Kiribati", "687": "New Caledonia",
    "688": "Tuvalu", "689": "French Polynesia", "690": "Tokelau", "691": "Micronesia",
    "692": "Marshall Islands",
    # 2-digit codes
    "20": "Egypt", "27": "South Africa", "30": "Greece", "31": "Netherlands",
    "32": "Belgium", "33": "France", "34": "Spain", "36": "Hungary",
    "39": "Italy", "40": "Romania", "41": "Switzerland", "43": "Austria",
    "44": "United Kingdom", "45": "Denmark", "46": "Sweden", "47": "Norway",
    "48": "Poland", "49": "Germany", "51": "Peru", "52": "Mexico",
    "53": "Cuba", "54": "Argentina", "55": "Brazil", "56": "Chile",
    "57": "Colombia", "58": "Venezuela", "60": "Malaysia", "61": "Australia",
    "62": "Indonesia", "63": "Philippines", "64": "New Zealand", "65": "Singapore",
    "66": "Thailand", "81": "Japan", "82": "South Korea", "84": "Vietnam",
    "86": "China", "90": "Turkey", "91": "India", "92": "Pakistan",
    "93": "Afghanistan", "94": "Sri Lanka", "95": "Myanmar", "98": "Iran",
    # 1-digit codes
    "1": "North America", "7": "Russia/Kazakhstan",
}


def extract_digits(text: str) -> str:
    return "".join(c for c in text if c in DIGITS)


def find_country_code(digits: str) -> str:
    """Return the calling code at the start of ``digits``, or ""."""
    for length in (3, 2, 1):
        if len(digits) >= length and digits[:length] in COUNTRY_CODES:
            return digits[:length]
    return ""


def reformat(template: str, digits: str) -> str:
    """
    Place ``digits`` into the digit positions of ``template``.

    Non-digit characters (``+``, spaces, parentheses, dashes) stay where
    they were. Positions left over when ``digits`` runs short get ``X``.
    """
    remaining = iter(digits)
    return "".join(
        next(remaining, FILLER) if c in DIGITS else c
        for c in template
    )


class PhoneNumberAnonymizer(BaseAnonymizer):
    """
    Anonymize phone numbers keeping their formatting.

    With ``preserve_country_code`` the calling code is detected from
    COUNTRY_CODES and kept; otherwise every digit is national. The digits
    that are not preserved are encrypted with the digit alphabet and placed
    back into the original separators.

    When the number has no calling code, encryption cycle-walks until the
    clear leading digits followed by the ciphertext do not start with one
    either, so the same split is found again when de-anonymizing.

    Options:
        preserve_country_code: Keep a recognized calling code (default True)
        preserve_leading_digits: Keep N digits after the calling code (default 0)
    """

    kind = AnonymizerKind.PHONE

    def __init__(self, cipher):
        super().__init__(cipher)
        self.preserve_country_code = True
        self.preserve_leading_digits = 0
        self._digits = cipher.with_alphabet(DIGITS)

    def set_preserve_country_code(self, preserve) -> None:
        self._check_mutable()
        self.preserve_country_code = as_bool(preserve)

    def set_preserve_leading_digits(self, count) -> None:
        self._check_mutable()
        self.preserve_leading_digits = max(as_int(count), 0)

    def _split(self, digits: str) -> tuple[str, str]:
        """Split into the clear prefix and the digits to transform."""
        country_code = find_country_code(digits) if self.preserve_country_code else ""
        rest = digits[len(country_code):]

        leading = ""
        count = self.preserve_leading_digits
        if count > 0 and len(rest) > count:
            leading = rest[:count]

        prefix = country_code + leading
        return prefix, digits[len(prefix):]

    @staticmethod
    def _walk(prefix: str, value: str, step) -> str:
        # Cycle-walk until the full number does not start with a calling code
        value = step(value)
        while find_country_code(prefix + value):
            value = step(value)
        return value

    def _transform(self, text: str, decrypting: bool) -> str:
        digits = extract_digits(text)
        if not digits:
            return text

        prefix, body = self._split(digits)
        step = partial(self._decrypt_field if decrypting else self._encrypt_field, self._digits)

        if not body:
            transformed = body
        elif self.preserve_country_code and not find_country_code(digits):
            transformed = self._walk(prefix, body, step)
        else:
            transformed = step(body)

        return reformat(text, prefix + transformed)

    def _anonymize(self, text: str) -> str:
        return self._transform(text, decrypting=False)

    def _deanonymize(self, text: str) -> str:
        return self._transform(text, decrypting=True)


class NanpPhoneAnonymizer(BaseAnonymizer):
    """
    Legacy North American variant.

    The last 10 digits are the national number (3-digit area code and
    7-digit subscriber number); any digits before them are the country
    code. Numbers with fewer than 10 digits fall back to string
    anonymization.

    The parts that are not preserved are concatenated, encrypted as one
    numeral and split back into their positions.

    Options:
        preserve_country_code: Keep the country code (default True)
        preserve_area_code: Keep the area code (default False)
        preserve_leading_digits: Keep N leading subscriber digits (default 0)
    """

    kind = AnonymizerKind.PHONE_NANP

    def __init__(self, cipher):
        super().__init__(cipher)
        self.preserve_country_code = True
        self.preserve_area_code = False
        self.preserve_leading_digits = 0
        self._digits = cipher.with_alphabet(DIGITS)

    def set_preserve_country_code(self, preserve) -> None:
        self._check_mutable()
        self.preserve_country_code = as_bool(preserve)

    def set_preserve_area_code(self, preserve) -> None:
        self._check_mutable()
        self.preserve_area_code = as_bool(preserve)

    def set_preserve_leading_digits(self, count) -> None:
        self._check_mutable()
        self.preserve_leading_digits = max(as_int(count), 0)

    def _parts(self, digits: str) -> list[tuple[str, bool]]:
        """Return (digits, preserved) segments in order."""
        country_code = digits[:-NANP_NATIONAL_LENGTH]
        national = digits[-NANP_NATIONAL_LENGTH:]
        area_code = national[:NANP_AREA_CODE_LENGTH]
        subscriber = national[NANP_AREA_CODE_LENGTH:]

        count = self.preserve_leading_digits
        if count > 0 and len(subscriber) > count:
            leading, subscriber = subscriber[:count], subscriber[count:]
        else:
            leading = ""

        return [
            (country_code, self.preserve_country_code),
            (area_code, self.preserve_area_code),
            (leading, True),
            (subscriber, False),
        ]

    def _transform(self, text: str, decrypting: bool) -> str:
        digits = extract_digits(text)
        parts = self._parts(digits)

        hidden = "".join(value for value, preserved in parts if not preserved)
        if decrypting:
            hidden = self._decrypt_field(self._digits, hidden)
        else:
            hidden = self._encrypt_field(self._digits, hidden)

        result = []
        position = 0
        for value, preserved in parts:
            if preserved:
                result.append(value)
            else:
                result.append(hidden[position:position + len(value)])
                position += len(value)
        return reformat(text, "".join(result))

    def _anonymize(self, text: str) -> str:
        if len(extract_digits(text)) < NANP_NATIONAL_LENGTH:
            return self._fallback_anonymize(text)
        return self._transform(text, decrypting=False)

    def _deanonymize(self, text: str) -> str:
        if len(extract_digits(text)) < NANP_NATIONAL_LENGTH:
            return self._fallback_deanonymize(text)
        return self._transform(text, decrypting=True)
