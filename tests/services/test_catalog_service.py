"""Tests for the shared catalog service behaviour, exercised through prompts and agents."""
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from models.enums import ContentStatus, TargetType
from models.user import User
from schemas.content import PromptCreate, PromptUpdate
from services.agent_service import agent_service
from services.exceptions import ContentNotFoundError, PermissionDeniedError
from services.prompt_service import prompt_service
from services.workflow_service import workflow_service


def prompt_data(**overrides) -> PromptCreate:  # noqa: ANN003
    data = {
        'title': 'Explain This Code',
        'description': 'Explain a snippet line by line.',
        'content': 'Explain the following code step by step.',
        'tags': ['Learning'],
    }
    data.update(overrides)
    return PromptCreate(**data)


async def test_create_starts_pending_with_slug(db_session: AsyncSession, test_user: User) -> None:
    prompt = await prompt_service.create(db_session, test_user, prompt_data())

    assert prompt.slug == 'explain-this-code'
    assert prompt.status == ContentStatus.PENDING
    assert prompt.featured is False
    assert prompt.author_id == test_user.id
    assert [tag.name for tag in prompt.tag_objects] == ['learning']


async def test_generate_unique_slug_adds_suffix(db_session: AsyncSession, test_user: User) -> None:
    await prompt_service.create(db_session, test_user, prompt_data())

    second = await prompt_service.create(db_session, test_user, prompt_data())
    assert second.slug != 'explain-this-code'
    assert second.slug.startswith('explain-this-code-')


async def test_slugs_are_unique_per_type(db_session: AsyncSession, test_user: User) -> None:
    """The same title may be used by a prompt and a workflow."""
    await prompt_service.create(db_session, test_user, prompt_data(title='Code Review'))
    slug = await workflow_service.generate_unique_slug(db_session, 'Code Review')
    assert slug == 'code-review'


async def test_get_by_slug_hides_unapproved(db_session: AsyncSession, test_user: User) -> None:
    prompt = await prompt_service.create(db_session, test_user, prompt_data())

    assert await prompt_service.get_by_slug(db_session, prompt.slug) is None
    assert await prompt_service.get_by_slug(db_session, prompt.slug, include_unapproved=True) is not None

    await prompt_service.set_status(db_session, prompt.id, ContentStatus.APPROVED)
    assert await prompt_service.get_by_slug(db_session, prompt.slug) is not None


async def test_set_status_unknown_id(db_session: AsyncSession) -> None:
    from uuid import uuid4

    with pytest.raises(ContentNotFoundError):
        await prompt_service.set_status(db_session, uuid4(), ContentStatus.APPROVED)


async def test_update_by_stranger_denied(
    db_session: AsyncSession, test_user: User, make_approved,  # noqa: ANN001
) -> None:
    prompt = await make_approved(TargetType.PROMPT, test_user)
    stranger = User(github_id=3003, login='stranger')
    db_session.add(stranger)
    await db_session.flush()

    with pytest.raises(PermissionDeniedError):
        await prompt_service.update(db_session, stranger, prompt.slug, PromptUpdate(title='Hijacked'))


async def test_update_by_author_returns_to_pending(
    db_session: AsyncSession, test_user: User, make_approved,  # noqa: ANN001
) -> None:
    prompt = await make_approved(TargetType.PROMPT, test_user, title='Original title')

    updated = await prompt_service.update(
        db_session, test_user, prompt.slug, PromptUpdate(title='New title'),
    )
    assert updated.title == 'New title'
    assert updated.slug == 'original-title'
    assert updated.status == ContentStatus.PENDING


async def test_get_many_by_slugs_keeps_order_and_drops_unknown(
    db_session: AsyncSession, test_user: User, make_approved,  # noqa: ANN001
) -> None:
    await make_approved(TargetType.PROMPT, test_user, title='Alpha prompt')
    await make_approved(TargetType.PROMPT, test_user, title='Beta prompt')

    found = await prompt_service.get_many_by_slugs(
        db_session, ['beta-prompt', 'missing', 'alpha-prompt', 'beta-prompt'],
    )
    assert [p.slug for p in found] == ['beta-prompt', 'alpha-prompt']


async def test_increment_downloads_requires_counter_and_approval(
    db_session: AsyncSession, test_user: User, make_approved,  # noqa: ANN001
) -> None:
    prompt = await make_approved(TargetType.PROMPT, test_user)
    with pytest.raises(ContentNotFoundError):
        await prompt_service.increment_downloads(db_session, prompt.id)

    agent = await make_approved(TargetType.AGENT, test_user, title='Counting agent')
    assert await agent_service.increment_downloads(db_session, agent.id) is True
    await db_session.refresh(agent)
    assert agent.downloads == 1


async def test_increment_views_noop_for_types_without_counters(
    db_session: AsyncSession, test_user: User, make_approved,  # noqa: ANN001
) -> None:
    prompt = await make_approved(TargetType.PROMPT, test_user)
    assert await prompt_service.increment_views(db_session, prompt.id) is False


async def test_tag_counts_with_prefix(
    db_session: AsyncSession, test_user: User, make_approved,  # noqa: ANN001
) -> None:
    await make_approved(TargetType.PROMPT, test_user, title='One', tags=['category:testing', 'x'])
    await make_approved(TargetType.PROMPT, test_user, title='Two', tags=['category:testing'])
    await make_approved(TargetType.PROMPT, test_user, title='Three', tags=['category:docs'])

    stats = await prompt_service.tag_counts(db_session, prefix='category:')
    assert stats == {'counts': {'testing': 2, 'docs': 1}, 'total': 3}
