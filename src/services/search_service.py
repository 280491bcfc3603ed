"""Site-wide search across every catalog type."""
from sqlalchemy.ext.asyncio import AsyncSession

from models.enums import Difficulty, TargetType
from services.registry import SECTION_NAMES, get_catalog_service, summarize
from services.vote_service import get_vote_totals

LIMIT_PER_SECTION = 20

# Response section name -> content type
SEARCH_SECTIONS: dict[str, TargetType] = {name: t for t, name in SECTION_NAMES.items()}

# Sections where curated items lead the results
FEATURED_FIRST = {TargetType.TOOL, TargetType.MCP, TargetType.INSTRUCTION, TargetType.AGENT}


async def search_all(
    db: AsyncSession,
    query: str,
    section: str = "all",
    difficulty: Difficulty | None = None,
    tags: list[str] | None = None,
    limit_per_section: int = LIMIT_PER_SECTION,
) -> dict:
    """
    Search every section (or just `section`) for approved matches.

    Returns a dict with `query`, `total_results` and one list of summaries per
    section. A blank query lists the newest approved items, still narrowed
    by `section`, `difficulty` and `tags`.
    """
    results: dict = {name: [] for name in SEARCH_SECTIONS}
    query = (query or "").strip()

    for name, target_type in SEARCH_SECTIONS.items():
        if section != "all" and section != name:
            continue
        entities = await get_catalog_service(target_type).quick_search(
            db,
            query,
            difficulty=difficulty,
            tags=tags,
            limit=limit_per_section,
            featured_first=target_type in FEATURED_FIRST,
        )
        totals = await get_vote_totals(db, target_type, [e.id for e in entities])
        results[name] = [
            {**summarize(target_type, entity), "vote_count": totals.get(entity.id, 0)}
            for entity in entities
        ]

    total_results = sum(len(items) for items in results.values())
    return {"query": query, "total_results": total_results, **results}
