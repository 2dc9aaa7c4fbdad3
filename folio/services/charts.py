"""Chart records."""

import uuid
from typing import Optional

from folio.db.store import CHARTS, DocumentStore
from folio.models.documents import Chart


class ChartService:
    def __init__(self, store: DocumentStore):
        self.store = store

    async def create(
        self,
        caller_id: str,
        chart_name: str,
        chart_type: Optional[str] = None,
        created_by: Optional[str] = None
    ) -> dict:
        """
        Store a chart whose ``chartId`` is the creator label plus a random suffix.

        The label defaults to the caller id when ``created_by`` is not given.
        """
        label = created_by or caller_id
        chart = Chart(
            user=caller_id,
            chartName=chart_name,
            chartType=chart_type,
            createdBy=label,
            chartId=f"{label}-{uuid.uuid4()}",
        )
        return await self.store.insert(CHARTS, chart.model_dump())
