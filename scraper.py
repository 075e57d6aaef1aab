import requests
from bs4 import BeautifulSoup
from datetime import datetime
import logging
import pytz

from models import FALLBACK, ScoreResult

logger = logging.getLogger(__name__)

BASE_URL = "https://www.cricbuzz.com"

HEADERS = {
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36',
}

IST = pytz.timezone('Asia/Kolkata')

TITLE_SUFFIX = " - Live Cricket Score, Commentary"

# Checked in order, first non-empty text wins.
MATCH_STATUS_SELECTORS = [
    '.cb-col.cb-col-100.cb-min-stts.cb-text-complete',
    '.cb-text-inprogress',
    '.cb-col.cb-col-100.cb-font-18.cb-toss-sts.cb-text-abandon',
    '.cb-text-stumps',
    '.cb-text-lunch',
    '.cb-text-inningsbreak',
    '.cb-text-tea',
    '.cb-text-rain',
    '.cb-text-wetoutfield',
    '.cb-text-delay',
    '.cb-col.cb-col-100.cb-font-18.cb-toss-sts.cb-text-',
]

TITLE_SELECTOR = 'h1.cb-nav-hdr'
START_DATE_SELECTOR = 'span[itemprop="startDate"]'
LIVESCORE_SELECTOR = '.cb-font-20.text-bold'
RUNRATE_SELECTOR = '.cb-font-12.cb-text-gray'


class FetchFailure(Exception):
    """The match page could not be retrieved. Carries no upstream detail."""

    def __init__(self, message="Failed to fetch the HTML content"):
        super().__init__(message)
        self.message = message


def match_url(match_id, base_url=BASE_URL):
    return f"{base_url.rstrip('/')}/live-cricket-scores/{match_id}"


def fetch_page(url, timeout=None):
    """GET a page with a browser User-Agent. No retries."""
    logger.info(f"Fetching {url}")
    try:
        response = requests.get(url, headers=HEADERS, timeout=timeout)
        response.raise_for_status()
        return response.text
    except requests.RequestException as e:
        logger.warning(f"Fetch failed for {url}: {e}")
        raise FetchFailure() from e


def _first_text(soup, selector):
    element = soup.select_one(selector)
    if element is None:
        return ''
    return element.get_text().strip()


def _text_or_fallback(soup, selector):
    return _first_text(soup, selector) or FALLBACK


def parse_match_status(soup):
    for selector in MATCH_STATUS_SELECTORS:
        status = _first_text(soup, selector)
        if status:
            return status
    return FALLBACK


def parse_title(soup):
    element = soup.select_one(TITLE_SELECTOR)
    if element is None:
        return FALLBACK
    title = element.get_text().replace(TITLE_SUFFIX, '', 1).strip()
    return title or FALLBACK


def format_match_date(value):
    """
    Render an ISO-8601 start date the way an en-IN browser shows Asia/Kolkata
    time, e.g. 'Date: 22/11/2024, 7:50:00 am'. Naive timestamps are UTC.
    Returns FALLBACK when the value is missing or unparseable.
    """
    if not value:
        return FALLBACK

    raw = value.strip()
    if raw.endswith('Z') or raw.endswith('z'):
        raw = raw[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(raw)
        if parsed.tzinfo is None:
            parsed = pytz.UTC.localize(parsed)
        local = parsed.astimezone(IST)
    except (ValueError, OverflowError):
        logger.debug(f"Unparseable start date: {value!r}")
        return FALLBACK

    hour = local.hour % 12 or 12
    period = 'am' if local.hour < 12 else 'pm'
    return (f"Date: {local.day}/{local.month}/{local.year}, "
            f"{hour}:{local.minute:02d}:{local.second:02d} {period}")


def parse_match_date(soup):
    element = soup.select_one(START_DATE_SELECTOR)
    content = element.get('content') if element is not None else None
    return format_match_date(content)


def extract_score(html):
    """Pull the score fields out of a live-cricket-scores page. Never raises."""
    soup = BeautifulSoup(html or '', 'html.parser')

    return ScoreResult(
        title=parse_title(soup),
        update=parse_match_status(soup),
        match_date=parse_match_date(soup),
        livescore=_text_or_fallback(soup, LIVESCORE_SELECTOR),
        runrate=_text_or_fallback(soup, RUNRATE_SELECTOR),
    )


def scrape_score(match_id, base_url=BASE_URL, timeout=None):
    html = fetch_page(match_url(match_id, base_url), timeout=timeout)
    result = extract_score(html)
    logger.info(f"Match {match_id}: {result.title} | {result.update}")
    return result
