"""Word list fetching and caching for blacklist and previous-password sources."""

import hashlib
import logging
import urllib.parse
from pathlib import Path
from typing import List, Optional

import requests

logger = logging.getLogger(__name__)


class WordListFetcher:
    """Fetches text sources (word lists, policy documents) from URIs."""

    # Hardcoded cache directory for password-policy
    CACHE_DIR = Path.home() / ".cache" / "password-policy"
    TIMEOUT_SECONDS = 10

    def __init__(self, cache_dir: Optional[str] = None):
        """
        Initialize word list fetcher.

        Args:
            cache_dir: Directory for caching remote sources
        """
        self.cache_dir = Path(cache_dir) if cache_dir else self.CACHE_DIR
        # Directory is created lazily, only when a remote source is fetched.

    def read_text(self, uri: str, base_dir: Optional[str] = None) -> str:
        """
        Read a source as text (with caching for remote URIs).

        Supports:
        - Relative paths, resolved against base_dir (or the working directory)
        - Absolute paths
        - file:// URIs
        - http:// and https:// URIs

        Raises:
            ValueError: For unsupported URI schemes
            RuntimeError: If a remote fetch fails
        """
        parsed = urllib.parse.urlparse(uri)

        if not parsed.scheme:
            path = Path(uri)
            if not path.is_absolute() and base_dir:
                path = Path(base_dir) / path
            return path.read_text(encoding="utf-8")

        if parsed.scheme == "file":
            path = urllib.parse.unquote(parsed.path)
            return Path(path).read_text(encoding="utf-8")

        if parsed.scheme in ("http", "https"):
            cache_key = hashlib.sha256(uri.encode()).hexdigest()
            cache_path = self.cache_dir / f"{cache_key}.txt"

            if cache_path.exists():
                return cache_path.read_text(encoding="utf-8")

            content = self._fetch_uri(uri)
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            cache_path.write_text(content, encoding="utf-8")
            return content

        raise ValueError(f"Unsupported URI scheme: {parsed.scheme} in {uri}")

    def fetch(self, uri: str, base_dir: Optional[str] = None) -> List[str]:
        """
        Load a word list: one entry per line.

        Blank lines and lines starting with '#' are skipped. Surrounding
        whitespace is stripped from each entry.
        """
        words = []
        for line in self.read_text(uri, base_dir).splitlines():
            entry = line.strip()
            if entry and not entry.startswith("#"):
                words.append(entry)
        logger.info(f"Loaded word list with {len(words)} entries", extra={"source": uri})
        return words

    def clear_cache(self) -> None:
        """Remove cached remote sources."""
        if not self.cache_dir.exists():
            return
        for cached in self.cache_dir.glob("*.txt"):
            cached.unlink()

    def _fetch_uri(self, uri: str) -> str:
        """Fetch content from HTTP/HTTPS URI."""
        logger.info("Fetching remote source", extra={"source": uri})
        try:
            response = requests.get(uri, timeout=self.TIMEOUT_SECONDS)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise RuntimeError(f"Failed to fetch {uri}: {e}")
        return response.text
