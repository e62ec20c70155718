#!/usr/bin/env python3
"""
MediaWiki Action API client for the DoubleCheck review tool.

Provides the queries the review UI needs:
- Page info and revision history lookups by title
- Recent changes, optionally narrowed to ORES-flagged edits
- Diffs against the previous revision
- Category membership with continuation handling

Every request from a client instance goes through one shared Throttle,
so no two requests start less than min_interval apart regardless of
which method issued them. Nothing is retried.

Usage:
    from doublecheck.wiki_api import WikiQueryClient

    client = WikiQueryClient(user_agent="DoubleCheck/1.0 (review tool)")
    pages = client.get_page_infos_by_titles("enwiki", ["Main Page"])
"""

import logging
import random
import threading
from dataclasses import replace
from typing import Callable, Iterator, Optional

import requests

from doublecheck.errors import Cancelled, InvalidArgument, RemoteQueryError
from doublecheck.models import PageInfo, RecentChangesPage, RecentChangesQuery
from doublecheck.throttle import Throttle
from doublecheck.wikis import api_url, resolve_domain, sandbox_url

MAX_MWAPI_LIMIT = 50
DEFAULT_USER_AGENT = "WikiLoop DoubleCheck Dev"


def _check_titles(titles: list[str]) -> None:
    if not titles or len(titles) > MAX_MWAPI_LIMIT:
        count = len(titles) if titles is not None else 0
        raise InvalidArgument(
            f"titles needs a length between 1 and {MAX_MWAPI_LIMIT}, but was {count}"
        )


def _section(data: dict, key: str, description: str) -> dict:
    """A top-level object of a response; absent reads as empty, anything else is malformed."""
    value = data.get(key)
    # formatversion=2 encodes an empty object as []
    if value is None or value == []:
        return {}
    if not isinstance(value, dict):
        raise RemoteQueryError(f"{description}: {key!r} is {type(value).__name__}, expected an object")
    return value


def _pages_of(data: dict, description: str) -> list[dict]:
    """The query.pages entries, as a list under either formatversion."""
    pages = _section(data, "query", description).get("pages") or {}
    if isinstance(pages, dict):
        pages = list(pages.values())
    elif not isinstance(pages, list):
        raise RemoteQueryError(f"{description}: 'pages' is {type(pages).__name__}, expected an object or list")
    return [p for p in pages if isinstance(p, dict)]


class WikiQueryClient:
    """Throttled MediaWiki Action API client."""

    def __init__(
        self,
        user_agent: Optional[str] = None,
        throttle: Optional[Throttle] = None,
        min_interval: float = 0.5,
        timeout: float = 30.0,
        resolver: Optional[Callable[[str], str]] = None,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the client.

        Args:
            user_agent: User-Agent header sent with every request
            throttle: Shared throttle (created from min_interval if not provided)
            min_interval: Seconds between request starts when creating a throttle
            timeout: Per-request timeout in seconds
            resolver: Maps a wiki key to its domain (default: wikis.resolve_domain)
            rng: Random source used for sampling revision ids
            logger: Logger instance (creates one if not provided)
        """
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.throttle = throttle or Throttle(min_interval)
        self.timeout = timeout
        self.resolver = resolver or resolve_domain
        self.rng = rng or random.Random()

        self.logger = logger or logging.getLogger("doublecheck.wiki_api")

        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        })

    def request(self, wiki: str, params: dict, description: str = "API request") -> dict:
        """
        Make one throttled Action API request.

        Args:
            wiki: Wiki key, resolved to a domain
            params: Query parameters for the API call
            description: Human-readable description for logging

        Returns:
            JSON response as dict

        Raises:
            InvalidArgument: if the wiki key cannot be resolved
            RemoteQueryError: on transport failure, bad status, unparseable
                body or an API error response
        """
        return self._get(self.resolver(wiki), {**params, "format": "json"}, description)

    def _get(self, domain: str, params: dict, description: str) -> dict:
        """Send params exactly as given to a resolved domain. See request()."""
        endpoint = api_url(domain)

        self.throttle.wait()
        self.logger.info(f"Requesting {description} from {endpoint}")
        try:
            response = self.session.get(endpoint, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise RemoteQueryError(f"{description} failed: {e}") from e
        except ValueError as e:
            raise RemoteQueryError(f"{description} returned an unparseable body: {e}") from e

        if not isinstance(data, dict):
            raise RemoteQueryError(f"{description} returned {type(data).__name__}, expected an object")
        if "error" in data:
            error = data["error"] if isinstance(data["error"], dict) else {}
            code = error.get("code", "unknown")
            info = error.get("info", "Unknown error")
            raise RemoteQueryError(f"{description}: API error {code}: {info}", code=code, info=info)
        return data

    def get_page_infos_by_titles(self, wiki: str, titles: list[str]) -> list[PageInfo]:
        """
        Fetch page info for up to 50 titles in one batched request.

        Titles that do not exist on the wiki are left out of the result.
        """
        _check_titles(titles)
        description = f"page info for {len(titles)} titles"
        data = self.request(
            wiki,
            {"action": "query", "prop": "pageprops", "titles": "|".join(titles)},
            description,
        )
        return [
            PageInfo.from_api(page)
            for page in _pages_of(data, description)
            if "missing" not in page and "invalid" not in page
        ]

    def get_revision_ids_by_title(
        self,
        wiki: str,
        title: str,
        start_revision_id: Optional[int] = None,
        limit: int = MAX_MWAPI_LIMIT,
    ) -> list[int]:
        """
        Revision ids of a page, newest first.

        With start_revision_id, only revisions strictly older than it are
        returned. Failures are logged and yield an empty list.
        """
        params = {
            "action": "query",
            "prop": "revisions",
            "titles": title,
            "rvprop": "ids",
            "rvslots": "main",
            "rvlimit": str(limit),
            "rvdir": "older",
        }
        if start_revision_id:
            params["rvstartid"] = str(start_revision_id)

        description = f"revisions of {title!r}"
        try:
            data = self.request(wiki, params, description)
            pages = _pages_of(data, description)
            revisions = (pages[0].get("revisions") or []) if pages else []
            if not isinstance(revisions, list):
                raise RemoteQueryError(
                    f"{description}: 'revisions' is {type(revisions).__name__}, expected a list"
                )
        except RemoteQueryError as e:
            self.logger.warning(f"Could not fetch revisions of {title!r} on {wiki}: {e}")
            return []

        # rvstartid is inclusive
        return [
            rev["revid"]
            for rev in revisions
            if isinstance(rev, dict) and "revid" in rev and rev["revid"] != start_revision_id
        ]

    def get_raw_recent_changes(self, ctx: Optional[RecentChangesQuery] = None, **kwargs) -> RecentChangesPage:
        """
        Query list=recentchanges for article-namespace, non-bot edits.

        Accepts a RecentChangesQuery or its fields as keyword arguments.
        bad=True also hides edits already reviewed via ORES; is_last=True
        keeps only the latest revision of each page. Pass the previous
        page's last_timestamp with direction="older" to keep walking back.
        """
        ctx = replace(ctx, **kwargs) if ctx else RecentChangesQuery(**kwargs)
        params = {
            "action": "query",
            "list": "recentchanges",
            "format": "json",
            "formatversion": "2",
            "rcnamespace": "0",
            "rcprop": "title|timestamp|ids|oresscores|flags|tags|sizes|comment|user",
            "rcshow": "!bot|oresreview" if ctx.bad else "!bot",
            "rctype": "edit",
            "rclimit": str(ctx.limit),
        }
        if ctx.is_last:
            params["rctoponly"] = "1"
        if ctx.direction:
            params["rcdir"] = ctx.direction
        if ctx.timestamp:
            params["rcstart"] = ctx.timestamp

        domain = self.resolver(ctx.wiki)
        self.logger.info(f"Try sandbox request here: {sandbox_url(domain, params)}")
        data = self._get(domain, params, "recent changes")
        _section(data, "query", "recent changes")
        _section(data, "continue", "recent changes")
        return RecentChangesPage.from_api(data)

    def _sample(self, ids: list[int], limit: int) -> list[int]:
        return self.rng.sample(ids, min(max(limit, 0), len(ids)))

    def get_latest_revision_ids(self, ctx: Optional[RecentChangesQuery] = None, **kwargs) -> list[int]:
        """A uniform random sample of ctx.limit ids from the latest batch of changes."""
        ctx = replace(ctx, **kwargs) if ctx else RecentChangesQuery(**kwargs)
        page = self.get_raw_recent_changes(replace(ctx, limit=MAX_MWAPI_LIMIT))
        return self._sample(page.revision_ids, ctx.limit)

    def get_latest_ores_revision_ids(self, ctx: Optional[RecentChangesQuery] = None, **kwargs) -> list[int]:
        """
        Like get_latest_revision_ids, drawing only from edits ORES rates as
        likely damaging and likely bad faith.
        """
        ctx = replace(ctx, **kwargs) if ctx else RecentChangesQuery(**kwargs)
        page = self.get_raw_recent_changes(replace(ctx, limit=MAX_MWAPI_LIMIT))
        flagged = [
            rc.revision_id
            for rc in page.changes
            if rc.revision_id is not None and rc.is_likely_vandalism()
        ]
        self.logger.debug(f"{len(flagged)} of {len(page.changes)} recent changes flagged by ORES")
        return self._sample(flagged, ctx.limit)

    def get_last_revisions_by_titles(
        self,
        titles: list[str],
        wiki: str = "enwiki",
        continuation_token: Optional[str] = None,
    ) -> dict:
        """
        Latest revision of each title, returned as the raw response.

        continuation_token must be an rvcontinue value from a previous
        response of this same query.
        """
        _check_titles(titles)
        params = {
            "action": "query",
            "prop": "revisions",
            "titles": "|".join(titles),
            "rvprop": "ids|timestamp|flags|comment|user|oresscores|tags|userid|roles|flagged",
        }
        if continuation_token:
            params["rvcontinue"] = continuation_token
        return self.request(wiki, params, f"last revisions of {len(titles)} titles")

    def get_diff_by_wiki_rev_id(self, wiki: str, revision_id: int) -> dict:
        """Compare a revision with the one before it. The response is returned as is."""
        return self.request(
            wiki,
            {"action": "compare", "fromrev": str(revision_id), "torelative": "prev"},
            f"diff of revision {revision_id}",
        )

    def iter_category_children(
        self,
        wiki: str,
        category_title: str,
        cancel: Optional[threading.Event] = None,
    ) -> Iterator[PageInfo]:
        """
        Lazily yield every member of a category, following cmcontinue.

        Each page is requested only after the previous one has been parsed.
        cancel is checked before every request; once set, Cancelled is raised.
        """
        params = {
            "action": "query",
            "list": "categorymembers",
            "formatversion": "2",
            "cmtitle": category_title,
            "cmprop": "ids|timestamp|title",
            "cmlimit": "500",
        }
        batch_num = 0

        while True:
            if cancel is not None and cancel.is_set():
                raise Cancelled(f"Listing {category_title!r} cancelled after {batch_num} batches")

            description = f"members of {category_title!r}"
            data = self.request(wiki, params.copy(), description)
            batch_num += 1

            members = _section(data, "query", description).get("categorymembers") or []
            if not isinstance(members, list):
                raise RemoteQueryError(f"{description}: 'categorymembers' is {type(members).__name__}, expected a list")
            self.logger.debug(f"Retrieved {len(members)} members in batch {batch_num} of {category_title!r}")
            for member in members:
                if isinstance(member, dict):
                    yield PageInfo.from_api(member)

            token = _section(data, "continue", description).get("cmcontinue")
            if not token:
                break
            params["cmcontinue"] = token

    def get_category_children(
        self,
        wiki: str,
        category_title: str,
        cancel: Optional[threading.Event] = None,
    ) -> list[PageInfo]:
        """
        All members of a category as one list.

        Raises:
            Cancelled: with .partial holding the members gathered so far
        """
        result = []
        try:
            for page in self.iter_category_children(wiki, category_title, cancel):
                result.append(page)
        except Cancelled as e:
            e.partial = result
            raise

        self.logger.info(f"Total members of {category_title!r}: {len(result)}")
        return result
