"""
Shared fixtures for the score service tests.

requests.get is always patched; no test reaches the network.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from app import create_app

MATCH_PAGE = """
<html>
<head><title>IND vs AUS</title></head>
<body>
  <h1 class="cb-nav-hdr cb-font-18 line-ht24">India vs Australia, 1st Test - Live Cricket Score, Commentary</h1>
  <span itemprop="startDate" content="2024-11-22T02:20:00+00:00"></span>
  <div class="cb-col cb-col-100 cb-min-stts cb-text-complete">India won by 295 runs</div>
  <div class="cb-text-rain">Rain stops play</div>
  <div class="cb-font-20 text-bold">AUS 238 (58.4)</div>
  <div class="cb-font-12 cb-text-gray">CRR: 4.05</div>
</body>
</html>
"""


def make_response(text='', status_code=200):
    response = MagicMock()
    response.text = text
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Server Error")
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def match_page():
    return MATCH_PAGE


@pytest.fixture
def mock_get():
    with patch('scraper.requests.get') as mocked:
        mocked.return_value = make_response(MATCH_PAGE)
        yield mocked


@pytest.fixture
def app():
    app = create_app({'TESTING': True, 'SCOREBOARD_BASE_URL': 'https://scores.example.com'})
    return app


@pytest.fixture
def client(app):
    return app.test_client()
