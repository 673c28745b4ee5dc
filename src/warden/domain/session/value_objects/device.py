"""Device value object derived from the User-Agent header."""

import re
from dataclasses import dataclass
from typing import Any, Optional

UNKNOWN_DEVICE = "unknown"

# (name, detection pattern, version pattern, version group)
# Order matters: iOS agents contain "like Mac OS X", Android agents "Linux".
_DEVICE_PATTERNS: list[tuple[str, re.Pattern[str], Optional[re.Pattern[str]], int]] = [
    (
        "iOS",
        re.compile(r"like Mac OS X"),
        re.compile(r"CPU( iPhone)? OS ([0-9._]+) like Mac OS X"),
        2,
    ),
    (
        "Android",
        re.compile(r"Android"),
        re.compile(r"Android ([0-9.]+)[);]"),
        1,
    ),
    (
        "macOS",
        re.compile(r"(Intel|PPC) Mac OS X"),
        re.compile(r"(Intel|PPC) Mac OS X ?([0-9._]*)[);]"),
        2,
    ),
    (
        "Windows",
        re.compile(r"Windows NT"),
        re.compile(r"Windows NT ([0-9._]+)[);]"),
        1,
    ),
    ("Linux", re.compile(r"Linux", re.IGNORECASE), None, 0),
]


@dataclass(frozen=True)
class Device:
    """Operating system a session was opened from."""

    name: str = UNKNOWN_DEVICE
    version: Optional[str] = None

    @classmethod
    def from_user_agent(cls, user_agent: Optional[str]) -> "Device":
        """Detect the operating system and its version from a User-Agent."""
        if not user_agent:
            return cls()

        for name, pattern, version_pattern, group in _DEVICE_PATTERNS:
            if not pattern.search(user_agent):
                continue
            version = None
            if version_pattern is not None:
                match = version_pattern.search(user_agent)
                if match and match.group(group):
                    version = match.group(group).replace("_", ".")
            return cls(name=name, version=version)

        return cls()

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "Device":
        if not data:
            return cls()
        return cls(
            name=str(data.get("name") or UNKNOWN_DEVICE),
            version=data.get("version"),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name}
        if self.version is not None:
            data["version"] = self.version
        return data

    def __str__(self) -> str:
        return f"{self.name} {self.version}" if self.version else self.name
