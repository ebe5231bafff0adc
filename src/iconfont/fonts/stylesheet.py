"""
Stylesheet Localization
=======================

Fetches the web stylesheet for each font family, downloads the assets it
references into the local asset cache and rewrites the stylesheet so it points
at those local copies.
"""

import logging
import posixpath
import re
from collections.abc import Iterable
from pathlib import Path
from urllib.parse import quote, urlparse

from tqdm import tqdm

from iconfont.core.config import DEFAULT_STYLESHEET_URL, BuildConfig, MissingAssetPolicy
from iconfont.core.exceptions import AssetFetchError, FetchError, StylesheetFetchError
from iconfont.core.models import AssetResult, AssetStatus, FamilyResult

from .cache import AssetCache
from .client import FontServiceClient
from .naming import sanitize_name

logger = logging.getLogger(__name__)

ASSET_URL_RE = re.compile(r"https?://[^\s)'\"]+")

# Characters left unescaped by JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_stylesheet_url(family: str, template: str = DEFAULT_STYLESHEET_URL) -> str:
    """Build the stylesheet request URL for a family query."""
    return template.format(family=encode_uri_component(family))


def extract_asset_urls(css_text: str) -> list[str]:
    """Return the distinct absolute URLs in a stylesheet, in order of appearance."""
    return list(dict.fromkeys(ASSET_URL_RE.findall(css_text)))


def local_asset_name(url: str) -> str:
    """
    Derive the local filename for an asset URL.

    The basename of the URL path is sanitized like any font file. URLs whose
    path has no basename, or ends in a dot segment, fall back to the encoded
    URL itself.
    """
    basename = posixpath.basename(urlparse(url).path)
    if basename in ("", ".", ".."):
        basename = encode_uri_component(url)
    return sanitize_name(basename)


def stylesheet_filename(family: str) -> str:
    """Return the stylesheet filename for a family query (``+`` removed)."""
    return f"{family.replace('+', '')}.css"


class StylesheetLocalizer:
    """
    Localizes remote family stylesheets.

    Failures are contained per unit of work: a stylesheet that cannot be
    fetched skips its family, an asset that cannot be fetched is logged and
    the stylesheet is still written.
    """

    def __init__(
        self,
        client: FontServiceClient,
        cache: AssetCache,
        css_dir: Path,
        config: BuildConfig | None = None,
    ):
        """
        Initialize stylesheet localizer.

        Args:
            client: HTTP client for the font service
            cache: Asset cache rooted at the output fonts directory
            css_dir: Directory receiving rewritten stylesheets
            config: Build configuration (URL template, prefix, rewrite policy)
        """
        self.client = client
        self.cache = cache
        self.css_dir = css_dir
        self.config = config or BuildConfig()

    def localize_all(self, families: Iterable[str]) -> list[FamilyResult]:
        """Localize every family in order. One family's failure never stops the rest."""
        iterator = list(families)
        if self.config.show_progress:
            iterator = tqdm(iterator, desc="Fetching stylesheets", unit="family")
        return [self.localize(family) for family in iterator]

    def localize(self, family: str) -> FamilyResult:
        """
        Fetch, localize and persist the stylesheet for one family.

        Args:
            family: Family query string

        Returns:
            FamilyResult describing the written stylesheet and its assets
        """
        stylesheet_url = build_stylesheet_url(family, self.config.fetch.stylesheet_url_template)

        try:
            css_text = self._fetch_stylesheet(family, stylesheet_url)
        except StylesheetFetchError as e:
            logger.warning(str(e))
            return FamilyResult(
                family=family, stylesheet_url=stylesheet_url, skipped=True, error=str(e)
            )

        assets = []
        replacements = {}
        for url in extract_asset_urls(css_text):
            asset = self._acquire_asset(url)
            if asset.rewritten:
                replacements[url] = f"{self.config.asset_url_prefix}{asset.local_name}"
            assets.append(asset)

        # Whole matches only: a URL that is a prefix of another stays intact
        css_text = ASSET_URL_RE.sub(
            lambda match: replacements.get(match.group(0), match.group(0)), css_text
        )

        css_path = self.css_dir / stylesheet_filename(family)
        css_path.parent.mkdir(parents=True, exist_ok=True)
        css_path.write_text(css_text, encoding="utf-8")
        logger.info(f"Wrote {css_path} ({len(assets)} assets)")

        return FamilyResult(
            family=family, stylesheet_url=stylesheet_url, css_path=css_path, assets=assets
        )

    def _fetch_stylesheet(self, family: str, url: str) -> str:
        try:
            return self.client.fetch_text(url)
        except FetchError as e:
            raise StylesheetFetchError(family, e) from e

    def _download_asset(self, url: str, local_name: str) -> None:
        try:
            data = self.client.fetch_binary(url)
        except FetchError as e:
            raise AssetFetchError(url, e) from e
        self.cache.put(local_name, data)

    def _acquire_asset(self, url: str) -> AssetResult:
        """Ensure one asset is cached locally and decide whether to rewrite its URL."""
        local_name = local_asset_name(url)

        if self.cache.exists(local_name):
            logger.debug(f"Skipping {url}: {local_name} already present")
            return AssetResult(url=url, local_name=local_name, status=AssetStatus.CACHED)

        try:
            self._download_asset(url, local_name)
        except AssetFetchError as e:
            logger.warning(str(e))
            # The rewrite policy decides whether a missing asset still gets a local reference
            rewritten = self.config.missing_asset_policy == MissingAssetPolicy.REWRITE
            return AssetResult(
                url=url,
                local_name=local_name,
                status=AssetStatus.FAILED,
                rewritten=rewritten,
                error=str(e),
            )

        return AssetResult(url=url, local_name=local_name, status=AssetStatus.DOWNLOADED)
