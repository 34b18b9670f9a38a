"""
Sales data view

Loads every sales record once and binds it to a tabular display.
"""

from typing import Any, Dict, List, Optional
import logging

import httpx
import pandas as pd

from app.config.settings import settings

logger = logging.getLogger(__name__)

ERROR_MESSAGE = "Error fetching data from the server."
TABLE_TITLE = "Sales Data - Tabular View"
TABLE_HEADERS = ["region", "product", "channel", "amount"]
RECORDS_PER_PAGE = 50


class SalesDataView:
    """
    Tabular view of all sales records

    The records are fetched with a single GET when the view is created.
    Rendering and pagination belong to the table widget that consumes
    `title`, `headers`, `sortable_columns` and `records_per_page`.
    """

    title = TABLE_TITLE
    headers = TABLE_HEADERS
    sortable_columns = TABLE_HEADERS
    records_per_page = RECORDS_PER_PAGE

    def __init__(self, api_base_url: Optional[str] = None, client: Optional[httpx.Client] = None):
        self.api_base_url = (api_base_url or settings.API_BASE_URL).rstrip("/")
        self.sales_data: List[Dict[str, Any]] = []
        self.error_message = ""

        self._client = client or httpx.Client(timeout=10.0)
        try:
            self.load()
        finally:
            if client is None:
                self._client.close()

    @property
    def url(self) -> str:
        return f"{self.api_base_url}/reports/sales/sales-data"

    def load(self):
        try:
            response = self._client.get(self.url)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            self.error_message = ERROR_MESSAGE
            logger.error(f"Error fetching sales data: {str(e)}")
            return

        self.sales_data = data
        self.error_message = ""
        logger.debug(f"Loaded {len(self.sales_data)} sales records")

    def to_frame(self) -> pd.DataFrame:
        """Bound records restricted to the table headers"""
        return pd.DataFrame(self.sales_data, columns=self.headers)
