# translations/exceptions.py


class TranslationError(Exception):
    """Base class for errors raised by the translations app."""


class KeyNotTranslatable(TranslationError, KeyError):
    """
    Raised when a key has no translation group behind it:
    neither `_<key>` nor `<key>` is a loaded translation group field.
    """

    def __init__(self, key):
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"Key '{self.key}' is not translatable"
