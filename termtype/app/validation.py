from termtype.app.errors import ConfigurationError


def parse_int(raw: str, what: str) -> int:
    text = (raw or "").strip()
    try:
        return int(text)
    except ValueError:
        raise ConfigurationError(f"invalid {what}: {text!r}") from None


def parse_choice(raw: str, low: int, high: int, what: str = "choice") -> int:
    value = parse_int(raw, what)
    if not low <= value <= high:
        raise ConfigurationError(f"invalid {what}: {value}")
    return value


def validate_word_count(raw: str, low: int, high: int) -> int:
    value = parse_int(raw, "word count")
    if not low <= value <= high:
        raise ConfigurationError(f"word count must be between {low} and {high}")
    return value
