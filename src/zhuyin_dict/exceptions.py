"""Custom exception hierarchy for zhuyin-dict."""


class ZhuyinDictError(Exception):
    """Base exception for all zhuyin-dict errors."""


class StoreUnavailableError(ZhuyinDictError):
    """Lexicon store failed to open or lacks its core columns."""


class SchemaMismatchError(ZhuyinDictError):
    """Expected columns are absent from the entries table."""


class ConfigError(ZhuyinDictError):
    """Invalid engine configuration (bad YAML, unknown key, bad value)."""

    def __init__(self, message: str, line: int | None = None):
        self.line = line
        super().__init__(message)
