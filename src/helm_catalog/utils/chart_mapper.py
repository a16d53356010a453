"""Map raw listing entries into display records."""

from __future__ import annotations

from datetime import datetime, timezone

from helm_catalog.models.chart import ChartSummary, DisplayChart

DEFAULT_DESCRIPTION = "No description available"
OTHERS = "others"

# Checked in order; first match wins.
CATEGORY_KEYWORDS: tuple[tuple[str, frozenset[str]], ...] = (
    ("database", frozenset({"database", "sql", "nosql", "redis", "postgres", "mysql", "mongodb"})),
    ("monitoring", frozenset({"monitoring", "metrics", "prometheus", "grafana", "observability"})),
    ("security", frozenset({"security", "auth", "authentication", "authorization"})),
    ("storage", frozenset({"storage", "volume", "persistent"})),
    ("networking", frozenset({"network", "ingress", "nginx", "proxy", "load-balancer"})),
    ("ai-ml", frozenset({"ai", "ml", "machine-learning", "tensorflow", "pytorch"})),
    ("devtools", frozenset({"dev", "development", "ci", "cd", "build", "deploy"})),
)

CATEGORIES: tuple[str, ...] = tuple(name for name, _ in CATEGORY_KEYWORDS) + (OTHERS,)


def categorize_chart(keywords: list[str]) -> str:
    lowered = {k.lower() for k in keywords}
    for category, words in CATEGORY_KEYWORDS:
        if lowered & words:
            return category
    return OTHERS


def map_chart(
    chart: ChartSummary,
    index: int,
    repository_name: str,
    fetched_at: str | None = None,
) -> DisplayChart:
    """Build a DisplayChart for the ``index``-th entry of a repository listing."""
    now = fetched_at or datetime.now(timezone.utc).isoformat()
    created = chart.created or now
    return DisplayChart(
        id=f"{repository_name}-{index}-{chart.name}",
        name=chart.name,
        version=chart.version,
        repository=f"{repository_name}/{chart.name}",
        repository_name=repository_name,
        description=chart.description or DEFAULT_DESCRIPTION,
        app_version=chart.app_version,
        icon=chart.icon,
        home=chart.home,
        category=categorize_chart(chart.keywords),
        created_at=created,
        updated_at=created,
        sources=list(chart.sources),
        keywords=list(chart.keywords),
        maintainers=list(chart.maintainers),
        dependencies=list(chart.dependencies),
    )


def map_charts(charts: list[ChartSummary], repository_name: str) -> list[DisplayChart]:
    fetched_at = datetime.now(timezone.utc).isoformat()
    return [map_chart(c, i, repository_name, fetched_at) for i, c in enumerate(charts)]


def filter_charts(
    charts: list[DisplayChart],
    search: str | None = None,
    category: str | None = None,
) -> list[DisplayChart]:
    """Case-insensitive search over name, description and keywords."""
    term = (search or "").lower()
    result: list[DisplayChart] = []
    for chart in charts:
        if term and not (
            term in chart.name.lower()
            or term in chart.description.lower()
            or any(term in k.lower() for k in chart.keywords)
        ):
            continue
        if category and category != "all" and chart.category != category:
            continue
        result.append(chart)
    return result


def install_commands(chart: DisplayChart, version: str, repo_url: str = "") -> list[tuple[str, str]]:
    """Return (title, command) pairs for installing ``chart`` with helm."""
    repo = chart.repository_name or chart.repository.split("/")[0]
    url = repo_url or f"https://charts.{repo}.io"
    return [
        ("Add Repository", f"helm repo add {repo} {url}"),
        ("Update Repository", "helm repo update"),
        ("Install Chart", f"helm install my-{chart.name} {repo}/{chart.name} --version {version}"),
    ]
