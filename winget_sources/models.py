"""Records produced from winget output."""

from dataclasses import dataclass
from typing import Dict


@dataclass
class Source:
    """A winget source registration (name + argument, usually a URL)."""
    name: str
    url: str

    def to_dict(self) -> Dict[str, str]:
        """Export as JSON-serializable dict"""
        return {"name": self.name, "url": self.url}
