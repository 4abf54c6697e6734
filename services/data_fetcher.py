"""
Read-through fetch of the installment sheet.

DataFetcher is the only place that ties the loaders and the cache together:

    cache hit  → cached payload
    cache miss → workbook → header map → canonical records → payload → cache
"""

import json
import logging

import pandas as pd

from loaders import (
    build_header_map,
    is_blank_row,
    map_row,
    read_used_range,
    resolve_workbook_path,
)
from loaders.config import CACHE_KEY, CACHE_MAX_BYTES

logger = logging.getLogger(__name__)


class DataFetcher:
    def __init__(self, config, cache, clock=None):
        """
        Args:
            config: SourceConfig describing the workbook, tab and cache TTL
            cache: CacheStore (or anything with get/put/remove returning CacheResult)
            clock: Optional callable returning an aware datetime for fetchedAt
        """
        self.config = config
        self.cache = cache
        self.clock = clock

    def _now_iso(self):
        if self.clock is not None:
            return self.clock().isoformat()
        return pd.Timestamp.now(tz=self.config.time_zone).isoformat()

    def fetch(self):
        """
        Return the full payload, from cache when possible.

        Raises:
            SourceNotFoundError: The workbook or tab is missing (never cached)
        """
        cached = self._read_cache()
        if cached is not None:
            logger.info("Serving %s rows from cache", cached['meta'].get('rowCount'))
            return cached

        path = resolve_workbook_path(self.config)
        title, rows = read_used_range(path, self.config.sheet_name)

        if len(rows) < 2:
            payload = self.empty_payload(title)
        else:
            payload = self.build_payload(title, rows)

        logger.info("Fetched %d rows from '%s'!%s", payload['meta']['rowCount'], title, self.config.sheet_name)
        self._write_cache(payload)
        return payload

    def invalidate(self):
        result = self.cache.remove(CACHE_KEY)
        logger.info("Cache purge requested (ok=%s)", result.ok)
        return result

    def _meta(self, title, row_count):
        return {
            'sheet': self.config.sheet_name,
            'spreadsheet': title,
            'rowCount': row_count,
            'fetchedAt': self._now_iso(),
        }

    def empty_payload(self, title):
        return {
            'success': True,
            'meta': self._meta(title, 0),
            'columns': [],
            'data': [],
            'debug': {
                'installmentStatusColumn': None,
                'installmentStatusIndex': -1,
                'installmentCandidates': [],
                'chosenColumn': None,
                'allHeaders': [],
                'sampleDataKeys': [],
            },
        }

    def build_payload(self, title, rows):
        headers = ['' if h is None else str(h) for h in rows[0]]
        resolution = build_header_map(headers)

        data = []
        for row in rows[1:]:
            if is_blank_row(row):
                continue
            data.append(map_row(
                row,
                resolution,
                tz=self.config.time_zone,
                include_original_headers=self.config.include_original_headers,
                headers=headers,
            ))

        debug = resolution.debug_info()
        debug['allHeaders'] = headers
        debug['sampleDataKeys'] = list(data[0].keys()) if data else []

        return {
            'success': True,
            'meta': self._meta(title, len(data)),
            'columns': headers,
            'data': data,
            'debug': debug,
        }

    def _read_cache(self):
        result = self.cache.get(CACHE_KEY)
        if not result.hit:
            return None
        try:
            cached = json.loads(result.value)
        except ValueError:
            logger.warning("Ignoring unreadable cache entry %s", CACHE_KEY)
            return None
        if not isinstance(cached, dict) or not isinstance(cached.get('meta'), dict):
            logger.warning("Ignoring cache entry %s with unexpected shape", CACHE_KEY)
            return None
        return cached

    def _write_cache(self, payload):
        """Best-effort write-through; failures only cost a recompute next time."""
        serialized = json.dumps(payload)
        size = len(serialized.encode('utf-8'))
        if size > CACHE_MAX_BYTES:
            logger.info("Payload is %d bytes, above %d; not caching", size, CACHE_MAX_BYTES)
            return
        self.cache.put(CACHE_KEY, serialized, self.config.cache_seconds)
