import logging

import pytest
import structlog

from xcstream.parsing import DARWIN_DIALECT, NON_DARWIN_DIALECT, ParseSession, XCTestOutputParser
from xcstream.results import TestRunResults


def input_to_test_output(text: str) -> list[str]:
    """Splits raw input into the terminated lines the parser records as output."""
    return [f"{line}\r\n" for line in text.split("\n")[:-1]]


@pytest.fixture(autouse=True)
def reset_logging():
    """Keep CLI invocations from leaving handlers bound to closed streams."""
    yield
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)
    structlog.reset_defaults()


@pytest.fixture
def session() -> ParseSession:
    return ParseSession()


@pytest.fixture
def darwin_parser() -> XCTestOutputParser:
    return XCTestOutputParser(DARWIN_DIALECT)


@pytest.fixture
def linux_parser() -> XCTestOutputParser:
    return XCTestOutputParser(NON_DARWIN_DIALECT)


@pytest.fixture
def darwin_results() -> TestRunResults:
    return TestRunResults(match_suffix=False)


@pytest.fixture
def linux_results() -> TestRunResults:
    return TestRunResults(match_suffix=True)


@pytest.fixture
def to_output():
    """The expected recorded output for a block of input text."""
    return input_to_test_output
