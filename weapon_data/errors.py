from typing import Optional


class WeaponDataError(ValueError):
    """Base error for anything that should stop a build."""


class SourceIntegrityError(WeaponDataError):
    def __init__(self, key: str, message: str) -> None:
        self.key = key
        super().__init__(f"{key}: {message}")


class MalformedFieldError(WeaponDataError):
    def __init__(self, key: str, field: str, raw: Optional[str]) -> None:
        self.key = key
        self.field = field
        self.raw = raw
        super().__init__(f"{key}: {field} is not a number ({raw!r})")


class UnknownValueError(WeaponDataError):
    def __init__(self, key: str, field: str, value: object) -> None:
        self.key = key
        self.field = field
        self.value = value
        super().__init__(f"{key}: unknown {field} {value!r}")


class ArtifactFormatError(WeaponDataError):
    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"{field}: {message}")
