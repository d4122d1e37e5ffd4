"""Language code validation shared by the update compiler and the translation cache."""

import re

# Two lowercase letters, optionally followed by an uppercase region: "fr", "en-US"
LANGUAGE_CODE_PATTERN = re.compile(r"^[a-z]{2}(-[A-Z]{2})?$")


def is_valid_language_code(code: object) -> bool:
    return isinstance(code, str) and LANGUAGE_CODE_PATTERN.fullmatch(code) is not None
