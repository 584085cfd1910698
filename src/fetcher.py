#!/usr/bin/env python3
"""
Page Fetcher for Chat Transcript Formatter
Retrieves shared conversation pages. This is the only module that touches the network.
"""

import re
import time
import random
import logging
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import requests

from config_manager import get_nested_value
from parsers.common import ExtractionError, ExtractorErrorHandler

logger = logging.getLogger(__name__)

class PageFetcher:
    """Fetch share-page markup with retries"""

    def __init__(self, config: Dict[str, Any], session: Optional[requests.Session] = None,
                 sleep=time.sleep):
        self.timeout = get_nested_value(config, 'fetch.timeout', 10)
        self.max_retries = max(1, get_nested_value(config, 'fetch.max_retries', 3))
        self.share_url_pattern = get_nested_value(config, 'fetch.share_url_pattern', r'claude\.ai/share/')
        self.user_agent = get_nested_value(config, 'fetch.user_agent', 'Mozilla/5.0')
        self.sleep = sleep

        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': self.user_agent,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8',
            'Accept-Language': 'en-US,en;q=0.5',
            'Accept-Encoding': 'gzip, deflate, br',
            'DNT': '1',
            'Connection': 'keep-alive',
            'Upgrade-Insecure-Requests': '1',
            'Sec-Fetch-Dest': 'document',
            'Sec-Fetch-Mode': 'navigate',
            'Sec-Fetch-Site': 'none',
            'Cache-Control': 'max-age=0',
        })

    def validate_url(self, url: str) -> None:
        """
        Check that the URL is an absolute share link

        Raises:
            ExtractionError: With error_type "invalid_url"
        """
        parsed = urlparse(url or "")
        if not (parsed.scheme in ('http', 'https') and parsed.netloc):
            raise ExtractionError(f"Invalid URL: {url}", "invalid_url", url)

        if self.share_url_pattern and not re.search(self.share_url_pattern, url):
            raise ExtractionError(f"Not a supported share URL: {url}", "invalid_url", url)

    def fetch(self, url: str) -> str:
        """
        Fetch page markup from URL with retries

        Args:
            url: Share URL to fetch

        Returns:
            Page markup

        Raises:
            ExtractionError: When the URL is invalid or every attempt fails
        """
        self.validate_url(url)
        last_error: Optional[ExtractionError] = None

        for attempt in range(self.max_retries):
            try:
                logger.debug(f"Fetching page (attempt {attempt + 1}/{self.max_retries})")
                response = self.session.get(url, timeout=self.timeout, allow_redirects=True)

                if response.status_code == 403:
                    logger.warning("403 Forbidden - trying with minimal headers")
                    response = self.session.get(
                        url,
                        timeout=self.timeout,
                        headers=self._minimal_headers(),
                        allow_redirects=True
                    )

                response.raise_for_status()

                logger.debug(f"Successfully fetched page ({len(response.text)} characters)")
                return response.text

            except requests.HTTPError as e:
                status = e.response.status_code if e.response is not None else None
                last_error = self._http_error(e, status, url)
            except requests.Timeout as e:
                last_error = ExtractionError(f"Request timed out: {e}", "timeout", url)
            except requests.ConnectionError as e:
                last_error = ExtractionError(f"Connection failed: {e}", "connection_error", url)
            except requests.RequestException as e:
                last_error = ExtractorErrorHandler.handle_extraction_error(e, url, "page fetch")

            logger.warning(f"Attempt {attempt + 1} failed: {last_error}")

            if not ExtractorErrorHandler.should_retry(last_error):
                break

            if attempt < self.max_retries - 1:
                wait_time = (2 ** attempt) + random.uniform(0, 1)
                logger.debug(f"Waiting {wait_time:.1f} seconds before retry...")
                self.sleep(wait_time)

        logger.error(f"Failed to fetch page after {attempt + 1} attempts")
        raise last_error

    def _http_error(self, error: requests.HTTPError, status: Optional[int], url: str) -> ExtractionError:
        if status == 403:
            return ExtractionError(f"Access denied (403): {error}", "access_denied", url)
        if status == 404:
            return ExtractionError(f"Not found (404): {error}", "not_found", url)
        return ExtractionError(f"HTTP error {status}: {error}", "http_error", url)

    def _minimal_headers(self) -> Dict[str, Optional[str]]:
        # Requests drops session headers whose per-request value is None
        headers: Dict[str, Optional[str]] = {name: None for name in self.session.headers}
        headers['User-Agent'] = self.user_agent
        return headers
