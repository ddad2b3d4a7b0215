"""
Jira REST API v2 worklog integration
"""

import logging
from typing import Optional

import requests

from .duration import format_duration
from .models import Config

logger = logging.getLogger(__name__)


class JiraWorklogError(Exception):
    """Raised when Jira does not accept a worklog"""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class JiraWorklogClient:
    """Adds worklogs to Jira issues with basic authentication"""

    def __init__(self, config: Config):
        self.config = config
        self.base_url = f"https://{config.server}/rest/api/2"
        self.session = requests.Session()
        self.session.auth = (config.username, config.password)
        self.session.headers.update({
            'Content-Type': 'application/json',
            'Accept': 'application/json'
        })

    def _make_request(self, method: str, url: str, **kwargs) -> requests.Response:
        """Make HTTP request, turning transport failures into JiraWorklogError"""
        try:
            return self.session.request(method, url, timeout=30, **kwargs)
        except requests.exceptions.Timeout:
            raise JiraWorklogError(f"Request timeout for {method} {url}")
        except requests.exceptions.ConnectionError:
            raise JiraWorklogError(f"Connection error for {method} {url}")
        except requests.exceptions.RequestException as e:
            raise JiraWorklogError(f"Request failed: {e}")

    def submit(self, ticket: str, started: str, seconds: int, comment: str = "") -> None:
        """Add ``seconds`` of work to ``ticket`` starting at ``started``"""
        logger.info(f"Adding {format_duration(seconds)} to worklog in {ticket} on {started[:10]} ...")

        response = self._make_request(
            'POST',
            f"{self.base_url}/issue/{ticket}/worklog",
            json={
                'comment': comment,
                'started': started,
                'timeSpentSeconds': seconds,
            }
        )

        if response.status_code != 201:
            raise JiraWorklogError(
                f"Jira returned {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

    def test_connection(self) -> bool:
        """Check the server answers and accepts our credentials"""
        try:
            response = self._make_request('GET', f"{self.base_url}/myself")
        except JiraWorklogError as e:
            logger.error(f"Connection test failed: {e}")
            return False

        if response.status_code != 200:
            logger.error(f"Connection test failed: HTTP {response.status_code}")
            return False

        user_info = response.json()
        logger.info(f"Connected to {self.config.server} as {user_info.get('displayName', self.config.username)}")
        return True
