"""Tests for site-wide search."""
from sqlalchemy.ext.asyncio import AsyncSession

from models.enums import TargetType
from models.user import User
from services.search_service import SEARCH_SECTIONS, search_all
from services.vote_service import cast_vote


async def test_blank_query_lists_newest(
    db_session: AsyncSession, test_user: User, make_approved,  # noqa: ANN001
) -> None:
    await make_approved(TargetType.WORKFLOW, test_user, title='First workflow', steps=['One'])
    await make_approved(TargetType.WORKFLOW, test_user, title='Second workflow', steps=['One'])

    results = await search_all(db_session, '  ', section='workflows')
    assert results['query'] == ''
    assert set(results) == {'query', 'total_results', *SEARCH_SECTIONS}
    assert [item['title'] for item in results['workflows']] == ['Second workflow', 'First workflow']
    assert results['total_results'] == 2


async def test_tool_summary_prefers_short_description(
    db_session: AsyncSession, test_user: User, make_approved,  # noqa: ANN001
) -> None:
    await make_approved(
        TargetType.TOOL,
        test_user,
        title='Ripgrep',
        description='Recursively search directories for a regex pattern.',
        short_description='Fast line-oriented search.',
    )

    results = await search_all(db_session, 'ripgrep')
    assert results['tools'][0]['description'] == 'Fast line-oriented search.'


async def test_results_carry_vote_count(
    db_session: AsyncSession, test_user: User, make_approved,  # noqa: ANN001
) -> None:
    recipe = await make_approved(TargetType.RECIPE, test_user, title='Async retries')
    await cast_vote(db_session, test_user, TargetType.RECIPE, recipe.id, 1)

    results = await search_all(db_session, 'retries')
    assert results['total_results'] == 1
    assert results['recipes'][0]['vote_count'] == 1
    assert results['recipes'][0]['slug'] == 'async-retries'


async def test_literal_wildcards(
    db_session: AsyncSession, test_user: User, make_approved,  # noqa: ANN001
) -> None:
    await make_approved(TargetType.PROMPT, test_user, title='Coverage to 100% fast')
    await make_approved(TargetType.PROMPT, test_user, title='Coverage to 1000 lines')

    results = await search_all(db_session, '100%')
    assert [item['title'] for item in results['prompts']] == ['Coverage to 100% fast']


async def test_limit_per_section(
    db_session: AsyncSession, test_user: User, make_approved,  # noqa: ANN001
) -> None:
    for i in range(3):
        await make_approved(TargetType.TOOL, test_user, title=f'Formatter {i}')

    results = await search_all(db_session, 'formatter', limit_per_section=2)
    assert len(results['tools']) == 2
