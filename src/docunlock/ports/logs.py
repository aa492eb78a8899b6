from typing import Any, Protocol


class EventLogger(Protocol):
    def debug(self, event: str, **kwargs: Any) -> None: ...

    def info(self, event: str, **kwargs: Any) -> None: ...

    def warn(self, event: str, **kwargs: Any) -> None: ...


class NullLogger:
    """Discard every event; used when the caller does not supply a logger."""

    def debug(self, event: str, **kwargs: Any) -> None:
        return None

    def info(self, event: str, **kwargs: Any) -> None:
        return None

    def warn(self, event: str, **kwargs: Any) -> None:
        return None

    warning = warn

    def error(self, event: str, **kwargs: Any) -> None:
        return None
