"""Rules that classify configuration changes by path and change type."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum, IntEnum

PATH_SEPARATOR = "."
PATH_TERMINATOR = "!"
OPTION_PREFIX = "{"
OPTION_SUFFIX = "}"
OPTION_SEPARATOR = ","
WILDCARD = "*"
ANCHOR = "@"

WILDCARDS = (WILDCARD, ANCHOR, ANCHOR + WILDCARD)


def _quote(value: object) -> str:
    if isinstance(value, Enum):
        value = value.value
    return json.dumps(str(value), ensure_ascii=False)


class ChangeType(str, Enum):
    """Kind of change detected between two configurations."""

    ANY = "any"
    NONE = "none"
    CREATE = "create"
    MODIFY = "modify"
    DELETE = "delete"


class RuleType(IntEnum):
    """Priority of a rule; higher values take precedence."""

    ALLOW = 0
    WARN = 100
    ERROR = 200
    IGNORE = 255


class ActionType(str, Enum):
    """Follow-up action attached to a rule."""

    SCALE_UP = "scale_up"
    SCALE_DOWN = "scale_down"


def normalize_rule_type(value: int) -> RuleType:
    """Map any priority value onto the closest known rule type below it."""
    if value == RuleType.IGNORE:
        return RuleType.IGNORE
    if value >= RuleType.ERROR:
        return RuleType.ERROR
    if value >= RuleType.WARN:
        return RuleType.WARN
    return RuleType.ALLOW


def rule_type_name(value: int) -> str:
    """Human readable name of a (normalized) rule type."""
    return {
        RuleType.IGNORE: "Ignore",
        RuleType.ERROR: "Error",
        RuleType.WARN: "Warn",
        RuleType.ALLOW: "Allow",
    }[normalize_rule_type(value)]


class RuleValidationError(ValueError):
    """Raised when a rule, rule path or path segment is malformed."""

    def __init__(self, message: str, subject: object = None):
        if isinstance(subject, RulePathSegment):
            message = f"Rule path segment {_quote(subject.path)}: {message}"
        elif isinstance(subject, RulePath):
            message = f"Rule path {_quote(subject.path)}: {message}"
        elif isinstance(subject, Rule):
            message = f"Rule {_quote(subject.match_path.path)}: {message}"
        super().__init__(message)
        self.message = message


class RulePathSegment:
    """One segment of a rule path: a name, wildcard, anchor or option block."""

    def __init__(self, path: str):
        self.path = path
        self.is_anchor = path.startswith(ANCHOR)
        self.is_wildcard = path in WILDCARDS
        self.options: tuple[str, ...] = ()

        if self.is_wildcard:
            return

        rest = path[len(ANCHOR):] if self.is_anchor else path
        options: list[str] = []
        if rest.startswith(OPTION_PREFIX) and rest.endswith(OPTION_SUFFIX):
            inner = rest[len(OPTION_PREFIX):]
            if inner.endswith(OPTION_SUFFIX):
                inner = inner[: -len(OPTION_SUFFIX)]
            options = inner.strip().split(OPTION_SEPARATOR)

        if self.is_anchor and not options:
            options = [rest]

        self.options = tuple(options)

    def __repr__(self) -> str:
        return f"RulePathSegment({self.path!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RulePathSegment):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def validate(self) -> None:
        """Raise RuleValidationError if the segment is malformed."""
        p = self.path

        def fail(message: str) -> RuleValidationError:
            return RuleValidationError(message, self)

        if p == "":
            raise fail("Segment must not be empty")

        if PATH_TERMINATOR in p:
            raise fail(
                f"Path terminator {_quote(PATH_TERMINATOR)} is only allowed "
                "at the end of last segment"
            )

        if (ANCHOR in p and not self.is_anchor) or p.count(ANCHOR) > 1:
            raise fail(
                f"Only a single anchor {_quote(ANCHOR)} is allowed, "
                "and it must be at start"
            )

        if WILDCARD in p and not self.is_wildcard:
            raise fail(
                f"Wildcard {_quote(WILDCARD)} can only be prefixed "
                f"with an anchor {_quote(ANCHOR)}"
            )

        prefix_index = p.find(OPTION_PREFIX)
        suffix_index = p.rfind(OPTION_SUFFIX)

        if p.count(OPTION_PREFIX) > 1:
            raise fail(f"Multiple option prefixes {_quote(OPTION_PREFIX)} are not allowed")
        if p.count(OPTION_SUFFIX) > 1:
            raise fail(f"Multiple option suffixes {_quote(OPTION_SUFFIX)} are not allowed")
        if prefix_index < 0 <= suffix_index:
            raise fail(f"Option prefix {_quote(OPTION_PREFIX)} is missing")
        if suffix_index < 0 <= prefix_index:
            raise fail(f"Option suffix {_quote(OPTION_SUFFIX)} is missing")
        if prefix_index > suffix_index:
            raise fail(
                f"Option prefix {_quote(OPTION_PREFIX)} must precede "
                f"its suffix {_quote(OPTION_SUFFIX)}"
            )

        if prefix_index >= 0 and suffix_index >= 0:
            if not p.endswith(OPTION_SUFFIX):
                raise fail(f"Option suffix {_quote(OPTION_SUFFIX)} must terminate the segment")
            if any(option == "" for option in self.options):
                raise fail("Options must not be empty")
        elif OPTION_SEPARATOR in p:
            raise fail(
                f"Separator {_quote(OPTION_SEPARATOR)} is only allowed "
                "inside an option block"
            )

    def matches(self, change_segment: str) -> bool:
        """Whether this segment matches one segment of a change path."""
        return (
            self.path == change_segment
            or self.is_wildcard
            or self.contains_option(change_segment)
        )

    def contains_option(self, option: str) -> bool:
        return option in self.options


class RulePath:
    """A rule path split into segments, with matching helpers."""

    def __init__(self, path: str):
        path = path.replace(" ", "")
        self.is_exact_path = path.endswith(PATH_TERMINATOR)
        if self.is_exact_path:
            path = path[: -len(PATH_TERMINATOR)]
        self.path = path
        self.segments: tuple[RulePathSegment, ...] = tuple(
            RulePathSegment(part) for part in path.split(PATH_SEPARATOR)
        )
        self.anchor_count = sum(1 for s in self.segments if s.is_anchor)
        self.wildcard_count = sum(1 for s in self.segments if s.is_wildcard)

    def __repr__(self) -> str:
        suffix = PATH_TERMINATOR if self.is_exact_path else ""
        return f"RulePath({self.path + suffix!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RulePath):
            return NotImplemented
        return (self.path, self.is_exact_path) == (other.path, other.is_exact_path)

    def __hash__(self) -> int:
        return hash((self.path, self.is_exact_path))

    def __len__(self) -> int:
        return len(self.segments)

    @property
    def is_anchor_path(self) -> bool:
        return self.anchor_count > 0

    def validate(self) -> None:
        """Raise RuleValidationError if the path is malformed."""
        if self.path == "":
            raise RuleValidationError("Path must not be empty", self)
        if self.anchor_count > 1:
            raise RuleValidationError(
                f"Only one anchor {_quote(ANCHOR)} is allowed in a rule path", self
            )
        for segment in self.segments:
            try:
                segment.validate()
            except RuleValidationError as err:
                raise RuleValidationError(str(err), self) from err

    def matches(self, change_path: str) -> bool:
        """Whether the rule path matches the given change path."""
        parts = change_path.split(PATH_SEPARATOR)
        if len(parts) < len(self):
            return False
        if self.is_exact_path and len(parts) != len(self):
            return False
        return all(seg.matches(part) for seg, part in zip(self.segments, parts))

    def find_anchor_path(self, change_path: str) -> str:
        """Prefix of the change path up to the anchored segment."""
        parts = change_path.split(PATH_SEPARATOR)
        if len(parts) < len(self):
            return change_path
        for i, seg in enumerate(self.segments):
            if seg.is_anchor and (seg.is_wildcard or seg.contains_option(parts[i])):
                return PATH_SEPARATOR.join(parts[: i + 1])
        return change_path


@dataclass
class Rule:
    """Conditions under which a change produces an event."""

    match_path: RulePath
    type: int = RuleType.ALLOW
    match_change_type: ChangeType = ChangeType.ANY
    action_type: ActionType | None = None
    message: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.match_path, str):
            self.match_path = RulePath(self.match_path)

    def validate(self) -> None:
        """Raise RuleValidationError if the change type or path is invalid."""
        valid = list(ChangeType)
        if self.match_change_type not in valid:
            listed = " ".join(t.value for t in valid)
            raise RuleValidationError(
                f"Invalid change type {_quote(self.match_change_type)}. "
                f"Valid change types are: [{listed}]",
                self,
            )
        self.match_path.validate()

    def is_of_type(self, rule_type: int) -> bool:
        """Compare rule types after normalizing both."""
        return normalize_rule_type(self.type) == normalize_rule_type(rule_type)