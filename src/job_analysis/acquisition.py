"""
Content Acquisition

Turns an analysis request into a plain-text posting body plus an optional
application email.

Pasted text is used as-is. URLs go through two scraping tiers ranked by cost:

1. StaticPageScraper: one HTTP GET parsed with BeautifulSoup. Fast and cheap,
   works for server-rendered job boards.
2. BrowserPageScraper: headless Chromium via Playwright, for job boards that
   render the description client-side.

The browser tier only runs when the static tier fails or returns less than
Config.STATIC_SCRAPE_ACCEPT_LENGTH characters.
"""

import asyncio
import logging
import re
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

import requests
from bs4 import BeautifulSoup
from playwright.async_api import async_playwright

from src.common.config import Config
from src.job_analysis.types import AcquisitionError, JobAnalysisInput, ScrapedPosting

logger = logging.getLogger(__name__)

URL_EXTRACTION_FAILED_MESSAGE = (
    "Could not extract job posting content from URL. "
    "Please try pasting the job description directly."
)
TEXT_TOO_SHORT_MESSAGE = (
    "Job description is too short to analyze. "
    "Please paste the full job posting."
)

# User agent to mimic browser (many boards reject raw requests)
HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml",
}

# Elements that never hold the description
NOISE_SELECTOR = "script, style, nav, header, footer"

# Job description containers, most specific first (ATS vendor classes, Indeed, generic)
DESCRIPTION_SELECTORS = [
    ".jv-job-detail-description",
    ".job-description",
    "#jobDescriptionText",
    ".description",
    "article",
    "main",
]

# A selector's text must be longer than this to be considered at all
SELECTOR_MIN_LENGTH = 100
# Below this, the best selector text is discarded in favour of the whole body
SELECTOR_FALLBACK_LENGTH = 200

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PREFERRED_EMAIL_PATTERN = re.compile(r"career|job|talent|hr|recruit", re.IGNORECASE)

# Runs in the page: drop noise elements, return rendered text
_BROWSER_EXTRACT_SCRIPT = """(selector) => {
    document.querySelectorAll(selector).forEach((el) => el.remove());
    return document.body ? document.body.innerText : "";
}"""


def extract_application_email(text: str) -> Optional[str]:
    """
    Find the most likely application email address in text or HTML.

    Addresses that look like a hiring inbox (careers@, jobs@, talent@, hr@,
    recruiting@) win over the first address found.

    Args:
        text: Posting text or raw HTML

    Returns:
        Email address, or None if the text contains none
    """
    emails = EMAIL_PATTERN.findall(text or "")
    if not emails:
        return None
    for email in emails:
        if PREFERRED_EMAIL_PATTERN.search(email):
            return email
    return emails[0]


def collapse_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


class PostingScraper(ABC):
    """Interface for one strategy that fetches a posting URL as plain text."""

    name: str = "generic"

    @abstractmethod
    async def scrape(self, url: str) -> ScrapedPosting:
        """Return the posting text found at url. May raise on network errors."""

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"{self.__class__.__name__}(name={self.name!r})"


class StaticPageScraper(PostingScraper):
    """Tier 1: plain HTTP fetch parsed with BeautifulSoup."""

    name = "static_html"

    def __init__(self, timeout: Optional[float] = None, session: Optional[requests.Session] = None):
        self.timeout = timeout if timeout is not None else Config.SCRAPE_REQUEST_TIMEOUT
        self._session = session

    async def scrape(self, url: str) -> ScrapedPosting:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._scrape_blocking, url)

    def _scrape_blocking(self, url: str) -> ScrapedPosting:
        """Fetch and parse on an executor thread; both block."""
        return parse_posting_html(self._fetch_html(url), source=self.name)

    def _fetch_html(self, url: str) -> str:
        """Blocking GET; raises for timeouts, network errors and non-2xx responses."""
        http = self._session or requests
        response = http.get(url, headers=HEADERS, timeout=self.timeout, allow_redirects=True)
        response.raise_for_status()
        return response.text


def parse_posting_html(html: str, source: str = "static_html") -> ScrapedPosting:
    """
    Extract the posting description and application email from raw HTML.

    Probes DESCRIPTION_SELECTORS and keeps the longest text over
    SELECTOR_MIN_LENGTH; if nothing reaches SELECTOR_FALLBACK_LENGTH the
    whole body text (whitespace-collapsed) is used instead.
    """
    soup = BeautifulSoup(html, "html.parser")
    for element in soup.select(NOISE_SELECTOR):
        element.decompose()

    description = ""
    for selector in DESCRIPTION_SELECTORS:
        text = "".join(el.get_text() for el in soup.select(selector)).strip()
        if len(text) > len(description) and len(text) > SELECTOR_MIN_LENGTH:
            description = text

    if len(description) < SELECTOR_FALLBACK_LENGTH:
        body = soup.body or soup
        description = collapse_whitespace(body.get_text(" "))

    return ScrapedPosting(
        description=description,
        application_email=extract_application_email(html),
        source=source,
    )


class BrowserPageScraper(PostingScraper):
    """Tier 2: headless Chromium, for client-side rendered job boards."""

    name = "browser"

    def __init__(
        self,
        headless: Optional[bool] = None,
        navigation_timeout_ms: Optional[int] = None,
        settle_delay_ms: Optional[int] = None,
    ):
        self.headless = Config.PLAYWRIGHT_HEADLESS if headless is None else headless
        self.navigation_timeout_ms = navigation_timeout_ms or Config.BROWSER_NAVIGATION_TIMEOUT_MS
        self.settle_delay_ms = Config.BROWSER_SETTLE_DELAY_MS if settle_delay_ms is None else settle_delay_ms

    async def scrape(self, url: str) -> ScrapedPosting:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=self.headless)
            try:
                page = await browser.new_page()
                await page.goto(url, wait_until="networkidle", timeout=self.navigation_timeout_ms)
                await page.wait_for_timeout(self.settle_delay_ms)

                description = await page.evaluate(_BROWSER_EXTRACT_SCRIPT, NOISE_SELECTOR)
                html = await page.content()
            finally:
                await browser.close()

        return ScrapedPosting(
            description=(description or "").strip(),
            application_email=extract_application_email(html),
            source=self.name,
        )


class ContentAcquirer:
    """
    Produces the posting text for an analysis request.

    Scrapers are tried in order; the first result of at least accept_length
    characters wins. The last scraper always runs to completion (bounded by
    last_tier_timeout) and the longest result seen is used if it meets
    min_length.
    """

    def __init__(
        self,
        scrapers: Optional[Sequence[PostingScraper]] = None,
        accept_length: Optional[int] = None,
        min_length: Optional[int] = None,
        last_tier_timeout: Optional[float] = None,
    ):
        self.scrapers: List[PostingScraper] = list(
            scrapers if scrapers is not None else (StaticPageScraper(), BrowserPageScraper())
        )
        if not self.scrapers:
            raise ValueError("ContentAcquirer needs at least one scraper")
        self.accept_length = accept_length if accept_length is not None else Config.STATIC_SCRAPE_ACCEPT_LENGTH
        self.min_length = min_length if min_length is not None else Config.MIN_TEXT_CONTENT_LENGTH
        self.last_tier_timeout = last_tier_timeout or Config.BROWSER_TOTAL_TIMEOUT

    async def acquire(self, job_input: JobAnalysisInput) -> ScrapedPosting:
        """
        Acquire posting text for job_input.

        Raises:
            AcquisitionError: If no viable posting text could be produced
        """
        if not job_input.is_url:
            return self._from_text(job_input.content)
        return await self._from_url(job_input.content)

    def _from_text(self, text: str) -> ScrapedPosting:
        if len(text) < self.min_length:
            raise AcquisitionError(TEXT_TOO_SHORT_MESSAGE)
        return ScrapedPosting(
            description=text,
            application_email=extract_application_email(text),
            source="text",
        )

    async def _from_url(self, url: str) -> ScrapedPosting:
        logger.info(f"Scraping job URL: {url}")

        *cheap_tiers, last_tier = self.scrapers
        best: Optional[ScrapedPosting] = None
        for scraper in cheap_tiers:
            try:
                posting = await scraper.scrape(url)
            except Exception as e:
                logger.warning(f"{scraper.name} scrape failed: {e}. Escalating.")
                continue

            if len(posting.description) >= self.accept_length:
                logger.info(f"Scraped {len(posting.description)} chars via {scraper.name}")
                return posting
            logger.info(
                f"{scraper.name} returned {len(posting.description)} chars "
                f"(< {self.accept_length}). Escalating."
            )
            best = _longer(best, posting)

        try:
            posting = await asyncio.wait_for(last_tier.scrape(url), timeout=self.last_tier_timeout)
            best = _longer(best, posting)
        except Exception as e:
            logger.warning(f"{last_tier.name} scrape failed: {e}")

        if best is None or len(best.description) < self.min_length:
            length = len(best.description) if best else 0
            logger.error(f"No job content extracted from {url} ({length} chars)")
            raise AcquisitionError(URL_EXTRACTION_FAILED_MESSAGE)

        logger.info(f"Scraped {len(best.description)} chars via {best.source}")
        return best


def _longer(current: Optional[ScrapedPosting], candidate: ScrapedPosting) -> ScrapedPosting:
    """Keep the candidate unless the current posting is strictly longer."""
    if current is None or len(candidate.description) >= len(current.description):
        return candidate
    return current
