"""Exception types raised by discovery clients, the cache and the mapper."""

from __future__ import annotations

from collections.abc import Sequence

from kubemapper.models.schema import GroupKind, GroupVersionResource


class NoMatchError(Exception):
    """The discovery service does not serve the requested group-version."""

    def __init__(self, group_version: str) -> None:
        super().__init__(f"no matches for group version {group_version!r}")
        self.group_version = group_version


class DiscoveryError(Exception):
    """A discovery call failed for a reason other than "not found".

    The original exception is kept as ``cause`` and chained as ``__cause__``.
    """

    def __init__(self, operation: str, cause: BaseException, group_version: str | None = None) -> None:
        target = f"({group_version})" if group_version is not None else ""
        super().__init__(f"error from {operation}{target}: {cause}")
        self.operation = operation
        self.cause = cause
        self.group_version = group_version


class NoKindMatchError(Exception):
    """No served version of a group contains the requested kind."""

    def __init__(self, group_kind: GroupKind, searched_versions: Sequence[str] = ()) -> None:
        self.group_kind = group_kind
        self.searched_versions = list(searched_versions)
        if self.searched_versions:
            message = f'no matches for kind "{group_kind.kind}" in versions {self.searched_versions}'
        else:
            message = f'no matches for kind "{group_kind.kind}" in group "{group_kind.group}"'
        super().__init__(message)


class NoResourceMatchError(Exception):
    """No cached group-version maps the requested resource to a kind."""

    def __init__(self, resource: GroupVersionResource) -> None:
        super().__init__(f"no matches for {resource.group}/{resource.version}, Resource={resource.resource}")
        self.resource = resource


def is_not_found(exc: BaseException) -> bool:
    """Return True for "no such group-version" failures.

    Covers NoMatchError and any client exception carrying an HTTP 404
    ``status`` (kubernetes_asyncio's ApiException).
    """
    if isinstance(exc, NoMatchError):
        return True
    return getattr(exc, "status", None) == 404
