"""lineup exception hierarchy.

Every error is a caller-input or usage error. Each carries a stable
``code`` (surfaced as ``ServiceError.code``) and a ``detail`` dict with
the offending value or violated bound.
"""

from __future__ import annotations

from typing import Any, ClassVar


class LineupError(Exception):
    """Base exception for all lineup errors."""

    code: ClassVar[str] = "LINEUP_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        self.detail: dict[str, Any] = detail
        super().__init__(message)


# --- Registry ---


class DuplicateIdentityError(LineupError):
    """Raised when an identity is already present in the registry."""

    code: ClassVar[str] = "DUPLICATE_IDENTITY"

    def __init__(self, identity: str) -> None:
        self.identity = identity
        super().__init__(f"Identity already registered: '{identity}'", identity=identity)


# --- Catalog ---


class UnknownTemplateError(LineupError):
    """Raised when a template key is not in the catalog."""

    code: ClassVar[str] = "UNKNOWN_TEMPLATE"

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Template not found: '{key}'", key=key)


# --- Categories ---


class UnknownCategoryError(LineupError):
    """Raised when no category factory is registered under a name."""

    code: ClassVar[str] = "UNKNOWN_CATEGORY"

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        super().__init__(
            f"Unknown category '{name}'. Available: {available}",
            name=name,
            available=available,
        )


# --- Builder ---


class BuilderUsageError(LineupError):
    """Raised when a builder operation is illegal in its current state."""

    code: ClassVar[str] = "BUILDER_USAGE"


class CategoryNotSelectedError(BuilderUsageError):
    """Raised when a part is added before a category is selected."""

    code: ClassVar[str] = "CATEGORY_NOT_SELECTED"

    def __init__(self) -> None:
        super().__init__("Category not selected: call select_category() first")


class InvalidDiscriminatorError(LineupError):
    """Raised when the category's validator rejects a part discriminator."""

    code: ClassVar[str] = "INVALID_DISCRIMINATOR"

    def __init__(self, category: str, label: str, discriminator: object) -> None:
        self.category = category
        self.discriminator = discriminator
        super().__init__(
            f"Invalid discriminator {discriminator!r} for '{label}' in category '{category}'",
            category=category,
            label=label,
            discriminator=discriminator,
        )


class InvalidDetailError(LineupError):
    """Raised by build() when a descriptive field holds a value the category rejects."""

    code: ClassVar[str] = "INVALID_DETAIL"

    def __init__(self, category: str, key: str, value: str, allowed: list[str]) -> None:
        self.category = category
        self.key = key
        self.value = value
        super().__init__(
            f"Invalid {key} {value!r} for category '{category}'. Allowed: {allowed}",
            category=category,
            key=key,
            value=value,
            allowed=allowed,
        )


class IncompleteConfigurationError(LineupError):
    """Raised by build() when the category or identity was never set."""

    code: ClassVar[str] = "INCOMPLETE_CONFIGURATION"

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Incomplete configuration: missing {missing}", missing=missing)


class OutOfBoundsError(LineupError):
    """Raised by build() when the part count falls outside [minimum, maximum]."""

    code: ClassVar[str] = "OUT_OF_BOUNDS"

    def __init__(self, actual: int, minimum: int, maximum: int) -> None:
        self.actual = actual
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"Part count out of bounds: actual={actual}, min={minimum}, max={maximum}",
            actual=actual,
            minimum=minimum,
            maximum=maximum,
        )


class DuplicatePartError(LineupError):
    """Raised by build() when two parts share a discriminator."""

    code: ClassVar[str] = "DUPLICATE_PART"

    def __init__(self, discriminator: object) -> None:
        self.discriminator = discriminator
        super().__init__(
            f"Duplicate discriminator: {discriminator!r}",
            discriminator=discriminator,
        )
