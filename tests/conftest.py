import os
import re

import pytest
import pytest_asyncio
from playwright.async_api import Error as PlaywrightError

from formqa.actions.action_handler import ActionHandler
from formqa.browser.config import RunConfig, find_config_file, load_run_config
from formqa.browser.session import BrowserSession
from formqa.pages.form_page import FormPage
from formqa.pages.login_page import LoginPage
from formqa.runner.tags import TagExpression
from formqa.utils.get_log import GetLog
from tests.fixture_app import FixtureApp

RUN_CONFIG_KEY = pytest.StashKey[RunConfig]()


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        '--formqa-config',
        action='store',
        default=None,
        help='YAML run configuration (overrides FORMQA_CONFIG; default: auto-search config/config.yaml)',
    )
    parser.addoption(
        '--base-url',
        action='store',
        default=None,
        help='Application under test (overrides FORMQA_BASE_URL; default: local fixture app)',
    )
    parser.addoption(
        '--grep-tags',
        action='store',
        default=None,
        help="Tag expression selecting scenarios, e.g. 'smoke+login -slow'",
    )
    parser.addoption('--headed', action='store_true', default=False, help='Show the browser window')


def load_session_config(config: pytest.Config) -> RunConfig:
    overrides = {'grep_tags': config.getoption('--grep-tags')}
    if config.getoption('--headed'):
        overrides['headless'] = False
    return load_run_config(find_config_file(config.getoption('--formqa-config')), overrides=overrides)


def pytest_configure(config: pytest.Config) -> None:
    config.stash[RUN_CONFIG_KEY] = load_session_config(config)


def pytest_collection_modifyitems(config: pytest.Config, items: list) -> None:
    run_config = config.stash[RUN_CONFIG_KEY]
    expression = TagExpression.parse(run_config.grep_tags)
    if expression.is_empty():
        return

    selected, deselected = [], []
    for item in items:
        tags = [tag for marker in item.iter_markers('tags') for tag in marker.args]
        if expression.matches(tags):
            selected.append(item)
        elif run_config.grep_omit_filtered:
            deselected.append(item)
        else:
            item.add_marker(pytest.mark.skip(reason=f'filtered out by tags: {run_config.grep_tags}'))
            selected.append(item)

    if deselected:
        config.hook.pytest_deselected(items=deselected)
        items[:] = selected


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    # Expose each phase's report on the item so fixtures can see failures
    outcome = yield
    report = outcome.get_result()
    setattr(item, f'rep_{report.when}', report)


@pytest.fixture(scope='session')
def fixture_app():
    app = FixtureApp().start()
    yield app
    app.stop()


@pytest.fixture(scope='session')
def run_config(request: pytest.FixtureRequest) -> RunConfig:
    # Priority: CLI --base-url > env FORMQA_BASE_URL > local fixture app
    base_url = request.config.getoption('--base-url') or os.getenv('FORMQA_BASE_URL')
    if not base_url:
        base_url = request.getfixturevalue('fixture_app').base_url
    configured = request.config.stash[RUN_CONFIG_KEY]
    # Browser runs log to ./logs; browser-free runs leave logging to pytest
    GetLog.get_log(log_level=configured.log.get('level', 'info'))
    return RunConfig(**{**configured.model_dump(), 'base_url': base_url})


def _artifact_name(nodeid: str) -> str:
    return re.sub(r'[^A-Za-z0-9_.-]+', '_', nodeid).strip('_')[:150]


def scenario_failed(node) -> bool:
    """True when the setup or call phase of ``node`` failed."""
    reports = (getattr(node, 'rep_setup', None), getattr(node, 'rep_call', None))
    return any(report is not None and report.failed for report in reports)


@pytest_asyncio.fixture
async def browser_session(request: pytest.FixtureRequest, run_config: RunConfig):
    """A fresh browser for every test; nothing carries over between tests."""
    artifact_dir = None
    if run_config.video or run_config.screenshot_on_failure:
        artifact_dir = GetLog.artifact_dir('artifacts')

    session = BrowserSession(run_config, artifact_dir=artifact_dir)
    try:
        await session.initialize()
    except PlaywrightError as e:
        if "Executable doesn't exist" in str(e):
            pytest.skip(f'Playwright browser not installed: run `playwright install chromium` ({e})')
        raise

    video = session.get_page().video
    video_path = await video.path() if video is not None else None
    yield session

    failed = scenario_failed(request.node)
    if failed and run_config.screenshot_on_failure:
        await session.screenshot(_artifact_name(request.node.nodeid))
    await session.close()
    # Recordings are only kept for failed scenarios
    if video_path and not failed and os.path.exists(video_path):
        os.remove(video_path)


@pytest_asyncio.fixture
async def login_page(browser_session: BrowserSession) -> LoginPage:
    page = LoginPage(browser_session)
    await page.visit()
    return page


@pytest_asyncio.fixture
async def form_page(browser_session: BrowserSession) -> FormPage:
    page = FormPage(browser_session)
    await page.visit()
    return page


@pytest.fixture
def actions(browser_session: BrowserSession) -> ActionHandler:
    return ActionHandler(browser_session)
