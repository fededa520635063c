# conftest.py
import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--run-optional",
        action="store_true",
        default=False,
        help="Run tests marked as optional (they execute statements against sqlite)",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-optional"):
        return

    keyword = config.getoption("keyword")
    skip_optional = pytest.mark.skip(reason="Optional test, use --run-optional to include")
    for item in items:
        if "optional" not in item.keywords:
            continue
        # An optional test picked explicitly with -k still runs
        if keyword and (keyword in item.name or keyword in item.nodeid):
            continue
        item.add_marker(skip_optional)
