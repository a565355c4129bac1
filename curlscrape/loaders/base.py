"""Page loader interface"""

from typing import Any, Dict, Optional, Protocol

from ..dom import Document


class PageLoader(Protocol):
    """Fetches a URL and returns the parsed document.

    Implementations raise FetchError when the page cannot be loaded.
    """

    async def load(self, url: str, options: Optional[Dict[str, Any]] = None) -> Document:
        ...
