"""Semantic version handling.

Parses ``MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]`` identifiers, decides
whether a deprecation should be reported for a caller's
``ignoreDeprecations`` threshold, and evaluates the npm-style ranges that
modules declare in their ``eyeglass.needs`` field.
"""

from __future__ import annotations

import functools
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List, Optional, Tuple, Union

if TYPE_CHECKING:
    from eyeglass.deprecation import DeprecationRecord

logger = logging.getLogger(__name__)

__all__ = [
    "VERSION",
    "SemanticVersion",
    "parse_version",
    "should_warn",
    "bump",
    "satisfies",
]

VERSION = "0.8.3"

_IDENT = r"(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
_SEMVER_PATTERN = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    rf"(?:-({_IDENT}(?:\.{_IDENT})*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class SemanticVersion:
    """A parsed semantic version, ordered by SemVer 2.0 precedence."""

    major: int
    minor: int
    patch: int
    prerelease: Tuple[str, ...] = ()
    build: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, value: str) -> "SemanticVersion":
        """Parse a version string.

        A leading ``v`` or ``=`` and surrounding whitespace are accepted,
        as npm does.

        Raises:
            ValueError: If ``value`` is not a semantic version.
        """
        if not isinstance(value, str):
            raise ValueError(f"Version must be a string, got {type(value).__name__}")
        text = value.strip().lstrip("=v").strip()
        match = _SEMVER_PATTERN.match(text)
        if match is None:
            raise ValueError(f"Invalid semantic version: {value!r}")
        major, minor, patch, pre, build = match.groups()
        return cls(
            major=int(major),
            minor=int(minor),
            patch=int(patch),
            prerelease=tuple(pre.split(".")) if pre else (),
            build=tuple(build.split(".")) if build else (),
        )

    @property
    def release(self) -> Tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def _precedence(self) -> Tuple[Any, ...]:
        if not self.prerelease:
            return (self.release, 1)
        identifiers = tuple(
            (0, int(part), "") if part.isdigit() else (1, 0, part)
            for part in self.prerelease
        )
        return (self.release, 0, identifiers)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._precedence() == other._precedence()

    def __lt__(self, other: "SemanticVersion") -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._precedence() < other._precedence()

    def __hash__(self) -> int:
        return hash(self._precedence())

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + ".".join(self.build)
        return text


def parse_version(value: Any) -> Optional[SemanticVersion]:
    """Return the parsed version, or None when ``value`` is not valid."""
    try:
        return SemanticVersion.parse(value)
    except ValueError:
        return None


def should_warn(
    deprecation: "DeprecationRecord",
    threshold: Optional[Any],
) -> bool:
    """Decide whether a deprecation is reported.

    A deprecation is suppressed only when ``threshold`` is a valid version
    at or above the version the deprecation was introduced in. Anything
    else, including a malformed threshold, reports it.
    """
    if threshold is None:
        return True
    limit = parse_version(threshold)
    if limit is None:
        logger.debug(
            "Ignoring malformed ignoreDeprecations value %r; reporting %s",
            threshold,
            deprecation.trigger_key,
        )
        return True
    introduced = parse_version(deprecation.introduced_in)
    if introduced is None:
        logger.debug(
            "Deprecation %s has malformed introduced_in %r; reporting it",
            deprecation.trigger_key,
            deprecation.introduced_in,
        )
        return True
    return not introduced <= limit


def bump(version: Union[str, SemanticVersion], part: str) -> str:
    """Return the next ``major``, ``minor`` or ``patch`` release of ``version``."""
    current = version if isinstance(version, SemanticVersion) else SemanticVersion.parse(version)
    if part == "major":
        return f"{current.major + 1}.0.0"
    if part == "minor":
        return f"{current.major}.{current.minor + 1}.0"
    if part == "patch":
        if current.prerelease:
            return f"{current.major}.{current.minor}.{current.patch}"
        return f"{current.major}.{current.minor}.{current.patch + 1}"
    raise ValueError(f"Unknown version part: {part!r}")


# Ranges

_WILDCARDS = {"", "*", "x", "X"}
_PARTIAL_PATTERN = re.compile(
    r"^v?(\*|x|X|0|[1-9]\d*)(?:\.(\*|x|X|0|[1-9]\d*)(?:\.(\*|x|X|0|[1-9]\d*)"
    rf"(?:-({_IDENT}(?:\.{_IDENT})*))?(?:\+[0-9a-zA-Z.-]+)?)?)?$"
)
_COMPARATOR_PATTERN = re.compile(r"^(<=|>=|<|>|=|\^|~>?)?\s*(.*)$")
_HYPHEN_PATTERN = re.compile(r"^\s*(\S+)\s+-\s+(\S+)\s*$")

Comparator = Tuple[str, SemanticVersion]


def _parse_partial(text: str) -> Tuple[List[Optional[int]], Tuple[str, ...]]:
    """Parse ``1``, ``1.2``, ``1.x`` or ``1.2.3-pre`` into parts (None = wildcard)."""
    match = _PARTIAL_PATTERN.match(text)
    if match is None:
        raise ValueError(f"Invalid version in range: {text!r}")
    major, minor, patch, pre = match.groups()
    parts: List[Optional[int]] = []
    for part in (major, minor, patch):
        if part is None or part in _WILDCARDS:
            parts.append(None)
        else:
            parts.append(int(part))
    # Anything after a wildcard is a wildcard too.
    for index in range(1, 3):
        if parts[index - 1] is None:
            parts[index] = None
    return parts, tuple(pre.split(".")) if pre else ()


def _version(major: int, minor: int = 0, patch: int = 0, pre: Tuple[str, ...] = ()) -> SemanticVersion:
    return SemanticVersion(major, minor, patch, pre)


def _expand_comparator(operator: str, text: str) -> List[Comparator]:
    if text in _WILDCARDS:
        return [] if operator in ("", "=", ">=", "<=", "^", "~", "~>") else [("<", _version(0))]
    (major, minor, patch), pre = _parse_partial(text)
    if major is None:
        return []

    if operator in ("~", "~>"):
        if minor is None:
            return [(">=", _version(major)), ("<", _version(major + 1))]
        return [(">=", _version(major, minor, patch or 0, pre)), ("<", _version(major, minor + 1))]

    if operator == "^":
        low = _version(major, minor or 0, patch or 0, pre)
        if major > 0 or minor is None:
            return [(">=", low), ("<", _version(major + 1))]
        if minor > 0 or patch is None:
            return [(">=", low), ("<", _version(0, minor + 1))]
        return [(">=", low), ("<", _version(0, 0, patch + 1))]

    if minor is None or patch is None:
        # X-range: 1.x, 1.2, >1.2, <=1
        upper = _version(major + 1) if minor is None else _version(major, minor + 1)
        lower = _version(major, minor or 0)
        if operator in ("", "="):
            return [(">=", lower), ("<", upper)]
        if operator == ">":
            return [(">=", upper)]
        if operator == ">=":
            return [(">=", lower)]
        if operator == "<":
            return [("<", lower)]
        return [("<", upper)]

    return [(operator or "=", _version(major, minor, patch, pre))]


def _parse_range_set(text: str) -> List[Comparator]:
    hyphen = _HYPHEN_PATTERN.match(text)
    if hyphen:
        low, high = hyphen.groups()
        comparators = _expand_comparator(">=", low)
        (h_major, h_minor, h_patch), h_pre = _parse_partial(high)
        if h_major is None:
            return comparators
        if h_minor is None:
            comparators.append(("<", _version(h_major + 1)))
        elif h_patch is None:
            comparators.append(("<", _version(h_major, h_minor + 1)))
        else:
            comparators.append(("<=", _version(h_major, h_minor, h_patch, h_pre)))
        return comparators

    # Allow "> = 1.2.3" style spacing between an operator and its version.
    tokens = re.sub(r"(<=|>=|<|>|=|\^|~>?)\s+", r"\1", text.strip()).split()
    comparators: List[Comparator] = []
    for token in tokens:
        operator, rest = _COMPARATOR_PATTERN.match(token).groups()
        comparators.extend(_expand_comparator(operator or "", rest))
    return comparators


def _test(version: SemanticVersion, comparator: Comparator) -> bool:
    operator, bound = comparator
    if operator == "<":
        return version < bound
    if operator == "<=":
        return version <= bound
    if operator == ">":
        return version > bound
    if operator == ">=":
        return version >= bound
    return version == bound


def satisfies(version: Union[str, SemanticVersion], range_expr: str) -> bool:
    """Return True when ``version`` falls within the npm-style ``range_expr``.

    Pre-release versions are compared by precedence only. Unparsable
    versions or ranges never match.
    """
    if isinstance(version, SemanticVersion):
        candidate: Optional[SemanticVersion] = version
    else:
        candidate = parse_version(version)
    if candidate is None or not isinstance(range_expr, str):
        return False

    for alternative in range_expr.split("||"):
        try:
            comparators = _parse_range_set(alternative)
        except ValueError:
            logger.debug("Unparsable version range %r", alternative)
            continue
        if all(_test(candidate, comparator) for comparator in comparators):
            return True
    return False
