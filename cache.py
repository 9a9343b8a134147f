# cache.py
"""Rendered-route cache.

Read routes store their payload under the dashboard path they back; mutations
call ``revalidate_path`` so the next read recomputes it.
"""
import logging
import threading
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

INVOICES_PATH = "/dashboard/invoices"


class RouteCache:
  def __init__(self) -> None:
    self._lock = threading.Lock()
    self._pages: Dict[str, Any] = {}

  def get(self, path: str) -> Optional[Any]:
    with self._lock:
      return self._pages.get(path)

  def put(self, path: str, value: Any) -> None:
    with self._lock:
      self._pages[path] = value

  def revalidate_path(self, path: str) -> None:
    with self._lock:
      dropped = self._pages.pop(path, None) is not None
    logger.debug("revalidated %s (cached=%s)", path, dropped)

  def is_cached(self, path: str) -> bool:
    with self._lock:
      return path in self._pages


route_cache = RouteCache()

def get_route_cache() -> RouteCache:
  return route_cache
