"""Category, artifact status and version relation color maps."""

from helm_catalog.models import ArtifactStatus

CATEGORY_COLORS: dict[str, str] = {
    "database": "blue",
    "monitoring": "yellow",
    "security": "red",
    "storage": "cyan",
    "networking": "green",
    "ai-ml": "magenta",
    "devtools": "bright_blue",
    "others": "dim",
}

STATUS_COLORS: dict[ArtifactStatus, str] = {
    ArtifactStatus.LOADING: "yellow",
    ArtifactStatus.LOADED: "green",
    ArtifactStatus.FAILED: "red bold",
}

RELATION_COLORS: dict[str, str] = {
    "current": "bold green",
    "major": "red bold",
    "minor": "yellow",
    "patch": "green",
    "older": "dim",
    "unknown": "dim",
}


def styled_category(category: str) -> str:
    color = CATEGORY_COLORS.get(category, "white")
    return f"[{color}]{category}[/{color}]"


def styled_status(status: ArtifactStatus) -> str:
    color = STATUS_COLORS.get(status, "white")
    return f"[{color}]{status.value}[/{color}]"


def styled_relation(relation: str) -> str:
    color = RELATION_COLORS.get(relation, "white")
    return f"[{color}]{relation}[/{color}]"
