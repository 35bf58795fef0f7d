class MagnetError(Exception):
    """Base error for magnet link decoding."""


class MalformedInputError(MagnetError):
    """Raised when a magnet link cannot be split into key/value pairs."""


class InvalidPriorityError(MagnetError):
    def __init__(self, key: str) -> None:
        super().__init__(f"invalid priority suffix in key {key!r}")
        self.key = key


class InvalidLengthError(MagnetError):
    def __init__(self, value: str) -> None:
        super().__init__(f"invalid exact length {value!r}")
        self.value = value


class UnrecognizedKeyError(MagnetError):
    def __init__(self, key: str) -> None:
        super().__init__(f"unrecognized key {key!r}")
        self.key = key


class CollectorClosedError(MagnetError):
    """Raised when pairs are fed to a collector that already finished."""
