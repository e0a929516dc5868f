"""Choose a safe example value for an environment variable from its name."""

from typing import Callable, NamedTuple

DEFAULT_PLACEHOLDER = "your_value_here"


class PlaceholderRule(NamedTuple):
    matches: Callable[[str], bool]
    value: str


def _contains(*needles: str) -> Callable[[str], bool]:
    return lambda key: any(needle in key for needle in needles)


# Evaluated top to bottom against the lower-cased key; first match wins.
# Order matters: DATABASE_URL is a URL, DB_HOST is a host, API_KEY is a secret.
PLACEHOLDER_RULES: list[PlaceholderRule] = [
    PlaceholderRule(_contains("url", "uri"), "https://example.com"),
    PlaceholderRule(_contains("port"), "3000"),
    PlaceholderRule(_contains("email"), "your_email_here"),
    PlaceholderRule(_contains("host"), "localhost"),
    PlaceholderRule(_contains("key", "secret", "token"), "your_secret_key_here"),
    PlaceholderRule(_contains("database", "db"), "database_name"),
    PlaceholderRule(_contains("user"), "username"),
    PlaceholderRule(_contains("pass"), "password"),
    PlaceholderRule(_contains("env", "environment"), "development"),
]


def placeholder_for(key: str, rules: list[PlaceholderRule] = PLACEHOLDER_RULES) -> str:
    """Return the example value for ``key``."""
    key_lower = key.lower()
    for rule in rules:
        if rule.matches(key_lower):
            return rule.value
    return DEFAULT_PLACEHOLDER
