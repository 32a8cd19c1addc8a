"""Built-in starter records written on first use of an empty store."""

from equipcare.models.inventory import MANUALS_KEY, STOCK_KEY
from equipcare.models.task import Cadence

_PLACEHOLDER_IMAGE = "https://placehold.co/600x400.png"

DAILY_TASKS = [
    {"id": "dt001", "taskName": "Oil Level Check - Unit A", "machineId": "CNC-001", "dueDate": "Today",
     "status": "Pending", "assignedTo": "John Doe", "priority": "High",
     "description": "Check oil level and top up if necessary.",
     "imageUrl": f"{_PLACEHOLDER_IMAGE}?text=Oil+Check"},
    {"id": "dt002", "taskName": "Pressure Gauge Reading - Unit B", "machineId": "PRESS-002", "dueDate": "Today",
     "status": "In Progress", "assignedTo": "Jane Smith", "priority": "Medium",
     "description": "Record pressure gauge reading.",
     "imageUrl": f"{_PLACEHOLDER_IMAGE}?text=Pressure+Gauge"},
    {"id": "dt003", "taskName": "Visual Inspection - Conveyor 1", "machineId": "CONV-001", "dueDate": "Yesterday",
     "status": "Overdue", "priority": "High",
     "description": "Visually inspect for any damage or wear.",
     "imageUrl": f"{_PLACEHOLDER_IMAGE}?text=Inspection"},
    {"id": "dt004", "taskName": "Clean Filters - Compressor X", "machineId": "COMP-00X", "dueDate": "Today",
     "status": "Completed", "assignedTo": "Mike Lee", "priority": "Medium",
     "description": "Clean or replace filters as needed.",
     "imageUrl": f"{_PLACEHOLDER_IMAGE}?text=Filter+Clean"},
]

WEEKLY_TASKS = [
    {"id": "wt001", "taskName": "Lubrication - Main Gearbox", "machineId": "CNC-001", "dueDate": "This Week",
     "status": "Pending", "assignedTo": "Team A", "priority": "High",
     "description": "Lubricate main gearbox as per schedule.",
     "imageUrl": f"{_PLACEHOLDER_IMAGE}?text=Lubrication"},
    {"id": "wt002", "taskName": "Belt Tension Check - Unit C", "machineId": "MOTOR-003", "dueDate": "This Week",
     "status": "Pending", "assignedTo": "Sarah Connor", "priority": "Medium",
     "description": "Check and adjust belt tension.",
     "imageUrl": f"{_PLACEHOLDER_IMAGE}?text=Belt+Check"},
    {"id": "wt003", "taskName": "Safety System Test - All Units", "machineId": "ALL", "dueDate": "End of Week",
     "status": "In Progress", "priority": "High",
     "description": "Test all safety interlocks and e-stops.",
     "imageUrl": f"{_PLACEHOLDER_IMAGE}?text=Safety+Test"},
]

MONTHLY_TASKS = [
    {"id": "mt001", "taskName": "Full System Diagnostics - Unit A", "machineId": "CNC-001", "dueDate": "End of Month",
     "status": "Pending", "priority": "High",
     "description": "Run full system diagnostics.", "imageUrl": _PLACEHOLDER_IMAGE},
    {"id": "mt002", "taskName": "Replace Wear Parts - Press 002", "machineId": "PRESS-002", "dueDate": "Mid Month",
     "status": "Completed", "assignedTo": "Maintenance Dept.", "priority": "Medium",
     "description": "Replace designated wear parts.", "imageUrl": _PLACEHOLDER_IMAGE},
    {"id": "mt003", "taskName": "Calibration Check - All Robots", "machineId": "ROBOT-CELL", "dueDate": "This Month",
     "status": "Pending", "priority": "Medium",
     "description": "Perform calibration checks.", "imageUrl": _PLACEHOLDER_IMAGE},
]

STOCK_ITEMS = [
    {"id": "stk001", "componentName": "Bearing SKF-6205", "partNumber": "SKF-6205-2Z", "quantity": 50,
     "location": "Shelf A1", "minStockLevel": 10, "imageUrl": _PLACEHOLDER_IMAGE, "dataAihint": "bearing metal"},
    {"id": "stk002", "componentName": "Filter Element H-24", "partNumber": "FLT-H-24B", "quantity": 5,
     "location": "Cabinet B3", "minStockLevel": 8, "imageUrl": _PLACEHOLDER_IMAGE, "dataAihint": "filter industrial"},
    {"id": "stk003", "componentName": "V-Belt XPA-1250", "partNumber": "VBT-XPA-1250", "quantity": 20,
     "location": "Shelf A2", "minStockLevel": 5, "imageUrl": _PLACEHOLDER_IMAGE, "dataAihint": "belt rubber"},
    {"id": "stk004", "componentName": "Hydraulic Oil ISO VG 46", "partNumber": "OIL-HYD-VG46", "quantity": 150,
     "location": "Storage Area 1 (Liters)", "minStockLevel": 50, "imageUrl": _PLACEHOLDER_IMAGE,
     "dataAihint": "oil drum"},
]

MANUALS = [
    {"id": "man001", "manualTitle": "CNC Mill XM500 Operator Manual", "machineType": "CNC XM500",
     "version": "3.1", "lastUpdated": "2023-05-15", "pdfUrl": "#", "coverImageUrl": _PLACEHOLDER_IMAGE,
     "dataAihint": "cnc machine"},
    {"id": "man002", "manualTitle": "Hydraulic Press HP-20 Maintenance Guide", "machineType": "HP-20 Press",
     "version": "1.5", "lastUpdated": "2022-11-01", "pdfUrl": "#", "coverImageUrl": _PLACEHOLDER_IMAGE,
     "dataAihint": "hydraulic press"},
    {"id": "man003", "manualTitle": "Robotic Arm KUKA-R800 Service Manual", "machineType": "KUKA R800",
     "version": "2.0 Rev B", "lastUpdated": "2024-01-20", "pdfUrl": "#", "coverImageUrl": _PLACEHOLDER_IMAGE,
     "dataAihint": "robotic arm"},
]

SEEDS = {
    Cadence.DAILY.collection_key: DAILY_TASKS,
    Cadence.WEEKLY.collection_key: WEEKLY_TASKS,
    Cadence.MONTHLY.collection_key: MONTHLY_TASKS,
    STOCK_KEY: STOCK_ITEMS,
    MANUALS_KEY: MANUALS,
}


def seed_records(key: str) -> list[dict]:
    """Fresh copies of the starter records for a collection (empty if none)."""
    return [dict(record) for record in SEEDS.get(key, [])]
