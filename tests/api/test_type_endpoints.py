"""
Tests for the endpoints specific to individual content types: stats,
downloads and resolved related content.
"""
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from models.enums import TargetType
from models.user import User
from tests.api.conftest import FAKE_UUID


# =============================================================================
# Instructions
# =============================================================================


async def test_instruction_download_renders_markdown_file(
    client: AsyncClient, test_user: User, make_approved,  # noqa: ANN001
) -> None:
    instruction = await make_approved(
        TargetType.INSTRUCTION,
        test_user,
        title='Python Style Guide',
        content='- Use type hints on public functions.',
        file_pattern='**/*.py',
        language='python',
    )

    response = await client.get(f'/instructions/{instruction.slug}/download')
    assert response.status_code == 200
    assert response.headers['content-type'].startswith('text/markdown')
    assert response.headers['content-disposition'] == (
        f'attachment; filename="copilot-instructions-{instruction.slug}.md"'
    )

    body = response.text
    assert body.startswith('# Python Style Guide\n')
    assert '# File Pattern: **/*.py\n' in body
    assert '# Language: python\n' in body
    assert '# Framework: N/A\n' in body
    assert f'# Source: http://localhost:3000/instructions/{instruction.slug}\n' in body
    assert '- Use type hints on public functions.' in body
    assert body.rstrip().endswith('# End of instruction')

    detail = (await client.get(f'/instructions/{instruction.slug}')).json()
    assert detail['downloads'] == 1


async def test_instruction_download_tracking(
    client: AsyncClient, test_user: User, make_approved,  # noqa: ANN001
) -> None:
    instruction = await make_approved(TargetType.INSTRUCTION, test_user)

    response = await client.post('/instructions/download', json={'id': str(instruction.id)})
    assert response.status_code == 200
    assert response.json() == {'success': True}

    response = await client.post('/instructions/download', json={'id': FAKE_UUID})
    assert response.status_code == 404


async def test_instruction_detail_counts_views(
    client: AsyncClient, test_user: User, make_approved,  # noqa: ANN001
) -> None:
    instruction = await make_approved(TargetType.INSTRUCTION, test_user)

    await client.get(f'/instructions/{instruction.slug}')
    detail = (await client.get(f'/instructions/{instruction.slug}')).json()
    assert detail['views'] == 2


async def test_instruction_stats(
    client: AsyncClient, test_user: User, make_approved,  # noqa: ANN001
) -> None:
    await make_approved(TargetType.INSTRUCTION, test_user, title='One', language='Python', featured=True)
    await make_approved(TargetType.INSTRUCTION, test_user, title='Two', language='python')
    await make_approved(TargetType.INSTRUCTION, test_user, title='Three', language='Go')

    response = await client.get('/instructions/stats')
    assert response.status_code == 200
    assert response.json() == {'total': 3, 'featured': 1, 'languages': 2}
    assert response.headers['cache-control'].startswith('public')


async def test_download_unknown_instruction_returns_404(client: AsyncClient) -> None:
    response = await client.get('/instructions/missing/download')
    assert response.status_code == 404


# =============================================================================
# Agents
# =============================================================================


async def test_agent_download_renders_agent_file(
    client: AsyncClient, test_user: User, make_approved,  # noqa: ANN001
) -> None:
    agent = await make_approved(
        TargetType.AGENT,
        test_user,
        title='Test Writer',
        description='Writes missing tests for a module.',
        content='You are a test engineer. Write tests for untested code.',
    )

    response = await client.get(f'/agents/{agent.slug}/download')
    assert response.status_code == 200
    assert response.headers['content-disposition'] == (
        f'attachment; filename="{agent.slug}.agent.md"'
    )
    body = response.text
    assert body.startswith('# Test Writer\n')
    assert '# Description: Writes missing tests for a module.\n' in body
    assert '# Category: N/A\n' in body
    assert f'# Source: http://localhost:3000/agents/{agent.slug}\n' in body
    assert body.rstrip().endswith('# End of agent file')


async def test_agent_detail_resolves_mcp_servers(
    client: AsyncClient, test_user: User, make_approved,  # noqa: ANN001
) -> None:
    server = await make_approved(
        TargetType.MCP, test_user, title='Filesystem server', name='modelcontextprotocol/filesystem',
    )
    agent = await make_approved(
        TargetType.AGENT, test_user, mcp_servers=['Filesystem', 'unknown-server'],
    )

    data = (await client.get(f'/agents/{agent.slug}')).json()
    assert data['mcp_servers'] == ['Filesystem', 'unknown-server']
    assert [s['slug'] for s in data['mcp_server_details']] == [server.slug]


async def test_agent_views_and_downloads_keep_updated_at(
    client: AsyncClient, test_user: User, make_approved,  # noqa: ANN001
) -> None:
    agent = await make_approved(TargetType.AGENT, test_user)

    first = (await client.get(f'/agents/{agent.slug}')).json()
    assert (await client.get(f'/agents/{agent.slug}/download')).status_code == 200
    second = (await client.get(f'/agents/{agent.slug}')).json()

    assert second['views'] == first['views'] + 1
    assert second['updated_at'] == first['updated_at']


async def test_agent_stats_default_category(
    client: AsyncClient, test_user: User, make_approved,  # noqa: ANN001
) -> None:
    await make_approved(TargetType.AGENT, test_user, title='Categorized', category='testing')
    await make_approved(TargetType.AGENT, test_user, title='Uncategorized')

    data = (await client.get('/agents/stats')).json()
    assert data['total'] == 2
    assert data['counts'] == {'testing': 1, 'Other': 1}
    assert data['categories'] == sorted(['testing', 'Other'])


# =============================================================================
# MCP servers and tools
# =============================================================================


async def test_mcp_stats_lowercases_categories(
    client: AsyncClient, test_user: User, make_approved,  # noqa: ANN001
) -> None:
    await make_approved(TargetType.MCP, test_user, title='Server one', category='Databases')
    await make_approved(TargetType.MCP, test_user, title='Server two', category='databases')
    await make_approved(TargetType.MCP, test_user, title='Server three')

    data = (await client.get('/mcps/stats')).json()
    assert data == {
        'total': 3,
        'categories': ['databases', 'other'],
        'counts': {'databases': 2, 'other': 1},
    }


async def test_mcp_category_filter_is_case_insensitive(
    client: AsyncClient, test_user: User, make_approved,  # noqa: ANN001
) -> None:
    await make_approved(TargetType.MCP, test_user, title='Postgres server', category='Databases')
    await make_approved(TargetType.MCP, test_user, title='Browser server', category='Browsers')

    data = (await client.get('/mcps/', params={'category': 'databases'})).json()
    assert [item['title'] for item in data['items']] == ['Postgres server']


async def test_tool_submission_without_content(client: AsyncClient) -> None:
    """Tools describe themselves through their fields, so content is optional."""
    response = await client.post('/tools/', json={
        'title': 'Ripgrep',
        'description': 'Recursively search directories for a regex.',
        'url': 'https://github.com/BurntSushi/ripgrep',
        'tags': ['category:cli'],
    })
    assert response.status_code == 201
    assert response.json()['url'] == 'https://github.com/BurntSushi/ripgrep'


async def test_tool_submission_rejects_bad_url(client: AsyncClient) -> None:
    response = await client.post('/tools/', json={
        'title': 'Broken tool',
        'description': 'A tool with a broken link.',
        'url': 'not a url',
        'tags': ['cli'],
    })
    assert response.status_code == 422


async def test_workflow_submission_requires_steps(client: AsyncClient) -> None:
    response = await client.post('/workflows/', json={
        'title': 'Empty workflow',
        'description': 'A workflow without any steps.',
        'content': 'This workflow forgot to list its steps.',
        'tags': ['process'],
        'steps': ['  '],
    })
    assert response.status_code == 422


# =============================================================================
# Migration guides and learning paths
# =============================================================================


async def test_migration_guide_resolves_related_content(
    client: AsyncClient,
    db_session: AsyncSession,
    test_user: User,
    make_approved,  # noqa: ANN001
) -> None:
    prompt = await make_approved(TargetType.PROMPT, test_user, title='Port a route')
    tool = await make_approved(TargetType.TOOL, test_user, title='Ripgrep')
    pending = (await client.post('/prompts/', json={
        'title': 'Unreviewed prompt',
        'description': 'Not approved, so never shown as related.',
        'content': 'This prompt is still waiting for moderation.',
        'tags': ['pending'],
    })).json()

    guide = await make_approved(
        TargetType.MIGRATION,
        test_user,
        title='Flask to FastAPI',
        from_stack='Flask',
        to_stack='FastAPI',
        related_prompt_slugs=[prompt.slug, pending['slug'], 'does-not-exist'],
        related_tool_slugs=[tool.slug],
    )

    data = (await client.get(f'/migrations/{guide.slug}')).json()
    assert [p['slug'] for p in data['related']['prompts']] == [prompt.slug]
    assert [t['slug'] for t in data['related']['tools']] == [tool.slug]
    assert data['related']['recipes'] == []


async def test_learning_path_resolves_steps_in_order(
    client: AsyncClient, test_user: User, make_approved,  # noqa: ANN001
) -> None:
    first = await make_approved(TargetType.PROMPT, test_user, title='First prompt')
    second = await make_approved(TargetType.PROMPT, test_user, title='Second prompt')
    path = await make_approved(
        TargetType.PATH,
        test_user,
        title='Getting started',
        prompt_slugs=[second.slug, first.slug],
    )

    data = (await client.get(f'/paths/{path.slug}')).json()
    assert [p['slug'] for p in data['related']['prompts']] == [second.slug, first.slug]
