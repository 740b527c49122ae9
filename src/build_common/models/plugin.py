"""Convention plugin metadata."""

from dataclasses import dataclass


@dataclass
class ConventionInfo:
    """Information about a convention plugin.

    Used for plugin registration. Each convention returns this (as a dict)
    to describe itself to the plugin system.

    Attributes:
        name: Convention name (e.g., 'java', 'functional-test')
        description: Human-readable description
        module: Module the convention was loaded from
    """

    name: str
    description: str
    module: str | None = None

    @classmethod
    def from_dict(cls, d: dict, module: str | None = None) -> "ConventionInfo":
        """Create ConventionInfo from plugin dict.

        Args:
            d: Dict with convention info fields
            module: Name of the module that returned it

        Returns:
            ConventionInfo instance
        """
        return cls(name=d["name"], description=d.get("description", ""), module=module)
