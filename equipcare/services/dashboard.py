"""Dashboard overview statistics."""

from pydantic import BaseModel, Field

from equipcare.models.inventory import STOCK_KEY, StockItem
from equipcare.models.task import Cadence, MaintenanceTask, TaskStatus
from equipcare.services.collections import parse_records
from equipcare.services.record_store import RecordStore
from equipcare.services.viewers import CollectionViewer

_OPEN_STATUSES = (TaskStatus.PENDING, TaskStatus.IN_PROGRESS, TaskStatus.OVERDUE)


class DashboardStats(BaseModel):
    """Stat cards on the overview page."""
    pending_daily_tasks: int = Field(0, description="Daily tasks not yet completed")
    low_stock_components: int = Field(0, description="Stock items below their minimum level")
    completed_weekly_tasks: int = Field(0, description="Weekly tasks marked completed")
    machines_operational: str = Field("100%", description="Share of tasks that are not overdue")


def compute_stats(store: RecordStore) -> DashboardStats:
    """Read the collections as stored (no seeding) and summarize them."""
    def tasks(cadence: Cadence) -> list[MaintenanceTask]:
        key = cadence.collection_key
        return parse_records(MaintenanceTask, store.read(key) or [], key)

    daily = tasks(Cadence.DAILY)
    weekly = tasks(Cadence.WEEKLY)
    all_tasks = daily + weekly + tasks(Cadence.MONTHLY)
    stock = parse_records(StockItem, store.read(STOCK_KEY) or [], STOCK_KEY)

    if all_tasks:
        overdue = sum(1 for task in all_tasks if task.status is TaskStatus.OVERDUE)
        operational = f"{round((len(all_tasks) - overdue) / len(all_tasks) * 100)}%"
    else:
        operational = "100%"

    return DashboardStats(
        pending_daily_tasks=sum(1 for task in daily if task.status in _OPEN_STATUSES),
        low_stock_components=sum(1 for item in stock if item.is_low_stock),
        completed_weekly_tasks=sum(1 for task in weekly if task.status is TaskStatus.COMPLETED),
        machines_operational=operational,
    )


class DashboardView(CollectionViewer):
    watched_keys = (*(cadence.collection_key for cadence in Cadence), STOCK_KEY)

    def load(self) -> list[DashboardStats]:
        return [compute_stats(self.store)]

    @property
    def stats(self) -> DashboardStats:
        return self.items[0] if self.items else DashboardStats()
