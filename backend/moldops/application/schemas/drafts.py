"""Pydantic draft schemas — one tagged variant per business entity.

A draft is validated before any insert/update reaches the gateway. Field
titles double as form labels; ``json_schema_extra={"relation": table}``
marks a foreign-key field whose options come from a lookup collection.
"""

from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

Priority = Literal["low", "medium", "high", "urgent"]
Severity = Literal["low", "medium", "high", "critical"]
Currency = Literal["IDR", "USD", "EUR", "SGD"]


def _relation(table: str, title: str, required: bool = False) -> Any:
    if required:
        return Field(..., title=title, json_schema_extra={"relation": table})
    return Field(None, title=title, json_schema_extra={"relation": table})


class EntityDraft(BaseModel):
    """Base for all drafts.

    Unknown keys (``id``, embedded relation objects, timestamps) are dropped,
    and blank strings coming from empty inputs are treated as missing.
    """

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    @model_validator(mode="before")
    @classmethod
    def _blank_strings_to_none(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: (None if isinstance(v, str) and not v.strip() else v) for k, v in data.items()}
        return data

    def to_row(self, partial: bool = False) -> dict[str, Any]:
        """JSON-ready payload.

        ``partial`` keeps only the fields the draft carried (an update patch);
        otherwise schema defaults are filled in.
        """
        return self.model_dump(mode="json", exclude_unset=partial)


class UserDraft(EntityDraft):
    username: str = Field(..., title="Username", max_length=100)
    email: str = Field(..., title="Email", pattern=r"^[^@\s]+@[^@\s]+$")
    first_name: str = Field(..., title="First Name")
    last_name: str = Field(..., title="Last Name")
    employee_id: str | None = Field(None, title="Employee ID")
    department: str | None = Field(None, title="Department")
    position: str | None = Field(None, title="Position")
    phone: str | None = Field(None, title="Phone")
    profile_picture_url: str | None = Field(None, title="Profile Picture URL")
    is_active: bool = Field(True, title="Status")


class MachineDraft(EntityDraft):
    machine_code: str = Field(..., title="Machine Code")
    name: str = Field(..., title="Machine Name")
    machine_type: Literal["injection", "blow", "auxiliary"] | None = Field(None, title="Type")
    brand: str | None = Field(None, title="Brand")
    model: str | None = Field(None, title="Model")
    serial_number: str | None = Field(None, title="Serial Number")
    year_manufactured: int | None = Field(None, title="Year Manufactured", ge=1900, le=2100)
    tonnage: float | None = Field(None, title="Tonnage", ge=0)
    shot_size_capacity: float | None = Field(None, title="Shot Size Capacity (grams)", ge=0)
    location: str | None = Field(None, title="Location")
    installation_date: date | None = Field(None, title="Installation Date")
    hourly_rate: float | None = Field(None, title="Hourly Rate", ge=0)
    status: Literal["active", "maintenance", "breakdown", "inactive"] = Field("active", title="Status")


class MoldDraft(EntityDraft):
    mold_code: str = Field(..., title="Mold Code")
    name: str = Field(..., title="Mold Name")
    mold_type: Literal["single_cavity", "multi_cavity", "family", "stack"] | None = Field(None, title="Type")
    number_of_cavities: int = Field(..., title="Number of Cavities", ge=1)
    material: str | None = Field(None, title="Material")
    weight: float | None = Field(None, title="Weight (kg)", ge=0)
    dimensions_length: float | None = Field(None, title="Length (mm)", ge=0)
    dimensions_width: float | None = Field(None, title="Width (mm)", ge=0)
    dimensions_height: float | None = Field(None, title="Height (mm)", ge=0)
    cycle_time_standard: float | None = Field(None, title="Cycle Time Standard (seconds)", ge=0)
    location: str | None = Field(None, title="Location")
    purchase_date: date | None = Field(None, title="Purchase Date")
    purchase_cost: float | None = Field(None, title="Purchase Cost", ge=0)
    supplier: str | None = Field(None, title="Supplier")
    image_url: str | None = Field(None, title="Image URL")
    condition_rating: Literal["excellent", "good", "fair", "poor"] = Field("good", title="Condition")
    status: Literal["available", "in_use", "maintenance", "damaged", "retired"] = Field(
        "available", title="Status"
    )


class ProductDraft(EntityDraft):
    product_code: str = Field(..., title="Product Code")
    name: str = Field(..., title="Name")
    category: str | None = Field(None, title="Category")
    material_type: str | None = Field(None, title="Material Type")
    weight_per_piece: float | None = Field(None, title="Weight per Piece (g)", ge=0)
    image_url: str | None = Field(None, title="Image URL")
    status: Literal["active", "inactive"] = Field("active", title="Status")


class RawMaterialDraft(EntityDraft):
    material_code: str = Field(..., title="Material Code")
    name: str = Field(..., title="Material Name")
    description: str | None = Field(None, title="Description")
    category: Literal["resin", "colorant", "additive", "packaging"] | None = Field(None, title="Category")
    material_type: str | None = Field(None, title="Material Type")
    supplier: str | None = Field(None, title="Supplier")
    unit_of_measure: str | None = Field(None, title="Unit of Measure")
    current_stock: float | None = Field(None, title="Current Stock", ge=0)
    minimum_stock: float | None = Field(None, title="Minimum Stock", ge=0)
    maximum_stock: float | None = Field(None, title="Maximum Stock", ge=0)
    reorder_point: float | None = Field(None, title="Reorder Point", ge=0)
    reorder_quantity: float | None = Field(None, title="Reorder Quantity", ge=0)
    unit_cost: float | None = Field(None, title="Unit Cost", ge=0)
    storage_location: str | None = Field(None, title="Storage Location")
    shelf_life_days: int | None = Field(None, title="Shelf Life (days)", ge=0)
    image_url: str | None = Field(None, title="Image URL")
    is_active: bool = Field(True, title="Status")


class ProductionOrderDraft(EntityDraft):
    order_number: str = Field(..., title="Order Number")
    product_id: str = _relation("products", "Product", required=True)
    machine_id: str | None = _relation("machines", "Machine")
    mold_id: str | None = _relation("molds", "Mold")
    target_quantity: int = Field(..., title="Target Quantity", ge=0)
    actual_quantity: int | None = Field(None, title="Actual Quantity", ge=0)
    ng_quantity: int | None = Field(None, title="NG Quantity", ge=0)
    scheduled_start_date: date | None = Field(None, title="Scheduled Start Date")
    scheduled_end_date: date | None = Field(None, title="Scheduled End Date")
    actual_start_date: date | None = Field(None, title="Actual Start Date")
    actual_end_date: date | None = Field(None, title="Actual End Date")
    cycle_time_standard: float | None = Field(None, title="Cycle Time Standard (s)", ge=0)
    cycle_time_actual: float | None = Field(None, title="Cycle Time Actual (s)", ge=0)
    setup_time_minutes: int | None = Field(None, title="Setup Time (minutes)", ge=0)
    breakdown_time_minutes: int | None = Field(None, title="Breakdown Time (minutes)", ge=0)
    priority_level: Priority = Field("medium", title="Priority")
    status: Literal["planned", "released", "in_progress", "completed", "cancelled", "on_hold"] = Field(
        "planned", title="Status"
    )
    notes: str | None = Field(None, title="Notes")


class FinishedGoodDraft(EntityDraft):
    product_id: str = _relation("products", "Product", required=True)
    production_order_id: str | None = _relation("production_orders", "Production Order")
    batch_number: str | None = Field(None, title="Batch Number")
    quantity: float = Field(..., title="Quantity", ge=0)
    production_date: date | None = Field(None, title="Production Date")
    expiry_date: date | None = Field(None, title="Expiry Date")
    location_id: str | None = Field(None, title="Location ID")
    unit_cost: float | None = Field(None, title="Unit Cost", ge=0)
    total_cost: float | None = Field(None, title="Total Cost", ge=0)
    quality_status: Literal["approved", "quarantine", "rejected", "hold"] | None = Field(
        None, title="Quality Status"
    )
    status: Literal["available", "reserved", "shipped", "damaged"] | None = Field(None, title="Status")
    notes: str | None = Field(None, title="Notes")


class CustomerDraft(EntityDraft):
    customer_code: str = Field(..., title="Customer Code")
    company_name: str = Field(..., title="Company Name")
    contact_person: str | None = Field(None, title="Contact Person")
    email: str | None = Field(None, title="Email")
    phone: str | None = Field(None, title="Phone")
    address: str | None = Field(None, title="Address")
    city: str | None = Field(None, title="City")
    state_province: str | None = Field(None, title="State/Province")
    postal_code: str | None = Field(None, title="Postal Code")
    country: str | None = Field(None, title="Country")
    payment_terms: str | None = Field(None, title="Payment Terms")
    credit_limit: float | None = Field(None, title="Credit Limit", ge=0)
    tax_id: str | None = Field(None, title="Tax ID")
    sales_representative: str | None = Field(None, title="Sales Representative")
    customer_type: Literal["regular", "premium", "vip"] = Field("regular", title="Type")
    status: Literal["active", "inactive", "suspended"] = Field("active", title="Status")


class SalesOrderDraft(EntityDraft):
    order_number: str = Field(..., title="Order Number")
    customer_id: str = _relation("customers", "Customer", required=True)
    order_date: date = Field(..., title="Order Date")
    required_date: date = Field(..., title="Required Date")
    promised_date: date | None = Field(None, title="Promised Date")
    delivery_date: date | None = Field(None, title="Delivery Date")
    total_amount: float | None = Field(None, title="Total Amount", ge=0)
    currency: Currency = Field("IDR", title="Currency")
    payment_terms: str | None = Field(None, title="Payment Terms")
    sales_person: str | None = Field(None, title="Sales Person")
    status: Literal[
        "pending", "confirmed", "in_production", "ready_to_ship", "shipped", "completed", "cancelled"
    ] = Field("pending", title="Status")
    payment_status: Literal["pending", "partial", "paid", "overdue"] = Field("pending", title="Payment Status")
    priority_level: Priority = Field("medium", title="Priority")
    notes: str | None = Field(None, title="Notes")


class QualityInspectionDraft(EntityDraft):
    production_order_id: str = _relation("production_orders", "Production Order", required=True)
    inspection_type: Literal["first_piece", "hourly", "final", "customer_complaint"] | None = Field(
        None, title="Inspection Type"
    )
    inspection_datetime: datetime | None = Field(None, title="Inspection Date & Time")
    inspector_id: str | None = Field(None, title="Inspector ID")
    sample_size: int | None = Field(None, title="Sample Size", ge=0)
    pass_quantity: int | None = Field(None, title="Pass Quantity", ge=0)
    fail_quantity: int | None = Field(None, title="Fail Quantity", ge=0)
    overall_result: Literal["pass", "fail", "conditional_pass"] | None = Field(None, title="Overall Result")
    action_taken: str | None = Field(None, title="Action Taken")
    notes: str | None = Field(None, title="Notes")


class MaintenanceScheduleDraft(EntityDraft):
    machine_id: str = _relation("machines", "Machine", required=True)
    maintenance_type: Literal["daily", "weekly", "monthly", "quarterly", "yearly"] | None = Field(
        None, title="Maintenance Type"
    )
    maintenance_item: str = Field(..., title="Maintenance Item")
    description: str | None = Field(None, title="Description")
    frequency_days: int = Field(..., title="Frequency (days)", ge=1)
    estimated_duration_hours: float | None = Field(None, title="Estimated Duration (hours)", ge=0)
    last_performed: date | None = Field(None, title="Last Performed")
    next_due_date: date | None = Field(None, title="Next Due Date")
    responsible_person: str | None = Field(None, title="Responsible Person")
    priority_level: Severity = Field("medium", title="Priority")
    is_active: bool = Field(True, title="Status")


class PurchaseOrderDraft(EntityDraft):
    po_number: str = Field(..., title="PO Number")
    supplier_name: str = Field(..., title="Supplier Name")
    supplier_contact: str | None = Field(None, title="Supplier Contact")
    order_date: date = Field(..., title="Order Date")
    required_date: date = Field(..., title="Required Date")
    total_amount: float | None = Field(None, title="Total Amount", ge=0)
    currency: Currency = Field("IDR", title="Currency")
    payment_terms: str | None = Field(None, title="Payment Terms")
    delivery_terms: str | None = Field(None, title="Delivery Terms")
    created_by: str | None = Field(None, title="Created By")
    approved_by: str | None = Field(None, title="Approved By")
    status: Literal["pending", "sent", "acknowledged", "delivered", "completed", "cancelled"] = Field(
        "pending", title="Status"
    )
    notes: str | None = Field(None, title="Notes")


class SupplierDraft(EntityDraft):
    supplier_code: str = Field(..., title="Supplier Code")
    company_name: str = Field(..., title="Company Name")
    contact_person: str | None = Field(None, title="Contact Person")
    email: str | None = Field(None, title="Email")
    phone: str | None = Field(None, title="Phone")
    address: str | None = Field(None, title="Address")
    city: str | None = Field(None, title="City")
    state_province: str | None = Field(None, title="State/Province")
    postal_code: str | None = Field(None, title="Postal Code")
    country: str | None = Field(None, title="Country")
    payment_terms: str | None = Field(None, title="Payment Terms")
    status: Literal["active", "inactive", "on_hold"] = Field("active", title="Status")
    notes: str | None = Field(None, title="Notes")


class ContainerDraft(EntityDraft):
    container_code: str = Field(..., title="Container Code")
    container_type: Literal["bin", "pallet", "drum", "tank", "crate"] | None = Field(None, title="Container Type")
    capacity_unit: str = Field(..., title="Capacity Unit")
    capacity_value: float = Field(..., title="Capacity Value", ge=0)
    current_fill_level: float | None = Field(None, title="Current Fill Level", ge=0)
    location: str | None = Field(None, title="Location")
    last_cleaned_date: date | None = Field(None, title="Last Cleaned Date")
    status: Literal["empty", "filling", "full", "in_use", "maintenance", "damaged"] = Field(
        "empty", title="Status"
    )
    notes: str | None = Field(None, title="Notes")


class CustomerComplaintDraft(EntityDraft):
    complaint_number: str = Field(..., title="Complaint Number")
    customer_id: str = _relation("customers", "Customer", required=True)
    product_id: str | None = _relation("products", "Product")
    sales_order_id: str | None = _relation("sales_orders", "Sales Order")
    complaint_date: date = Field(..., title="Complaint Date")
    description: str = Field(..., title="Description")
    severity: Severity = Field("medium", title="Severity")
    status: Literal["open", "in_progress", "resolved", "closed"] = Field("open", title="Status")
    resolution_date: date | None = Field(None, title="Resolution Date")
    action_taken: str | None = Field(None, title="Action Taken")
    responsible_person: str | None = Field(None, title="Responsible Person")
    notes: str | None = Field(None, title="Notes")


class ProductionCostDraft(EntityDraft):
    production_order_id: str | None = _relation("production_orders", "Production Order")
    cost_date: date = Field(..., title="Cost Date")
    material_cost: float | None = Field(None, title="Material Cost", ge=0)
    labor_cost: float | None = Field(None, title="Labor Cost", ge=0)
    machine_cost: float | None = Field(None, title="Machine Cost", ge=0)
    overhead_cost: float | None = Field(None, title="Overhead Cost", ge=0)
    total_cost: float | None = Field(None, title="Total Cost", ge=0)
    unit_cost: float | None = Field(None, title="Unit Cost", ge=0)
    notes: str | None = Field(None, title="Notes")


class MachineDowntimeDraft(EntityDraft):
    machine_id: str | None = _relation("machines", "Machine")
    downtime_start: datetime = Field(..., title="Downtime Start")
    downtime_end: datetime | None = Field(None, title="Downtime End")
    duration_minutes: int | None = Field(None, title="Duration (minutes)", ge=0)
    reason: str = Field(..., title="Reason")
    action_taken: str | None = Field(None, title="Action Taken")
    reported_by: str | None = Field(None, title="Reported By")
    status: Literal["active", "resolved", "pending"] = Field("active", title="Status")
    notes: str | None = Field(None, title="Notes")

    @model_validator(mode="after")
    def _end_after_start(self) -> "MachineDowntimeDraft":
        if self.downtime_end is not None and self.downtime_end < self.downtime_start:
            raise ValueError("downtime_end must not be before downtime_start")
        return self


class MaterialBatchDraft(EntityDraft):
    batch_number: str = Field(..., title="Batch Number")
    material_id: str | None = _relation("raw_materials", "Raw Material")
    quantity: float = Field(..., title="Quantity", ge=0)
    unit_of_measure: str | None = Field(None, title="Unit of Measure")
    received_date: date = Field(..., title="Received Date")
    expiry_date: date | None = Field(None, title="Expiry Date")
    supplier_id: str | None = _relation("suppliers", "Supplier")
    unit_cost: float | None = Field(None, title="Unit Cost", ge=0)
    total_cost: float | None = Field(None, title="Total Cost", ge=0)
    storage_location: str | None = Field(None, title="Storage Location")
    status: Literal["in_stock", "consumed", "expired", "quarantine"] = Field("in_stock", title="Status")
    notes: str | None = Field(None, title="Notes")


class WorkOrderDraft(EntityDraft):
    work_order_number: str = Field(..., title="Work Order Number")
    order_type: Literal["maintenance", "repair", "calibration", "installation", "production_setup"] | None = Field(
        None, title="Order Type"
    )
    description: str = Field(..., title="Description")
    machine_id: str | None = _relation("machines", "Machine")
    mold_id: str | None = _relation("molds", "Mold")
    product_id: str | None = _relation("products", "Product")
    priority_level: Priority = Field("medium", title="Priority")
    status: Literal["pending", "in_progress", "completed", "on_hold", "cancelled"] = Field(
        "pending", title="Status"
    )
    assigned_to: str | None = Field(None, title="Assigned To")
    scheduled_start_date: date | None = Field(None, title="Scheduled Start Date")
    scheduled_end_date: date | None = Field(None, title="Scheduled End Date")
    actual_start_date: date | None = Field(None, title="Actual Start Date")
    actual_end_date: date | None = Field(None, title="Actual End Date")
    notes: str | None = Field(None, title="Notes")


class DailyProductionScheduleDraft(EntityDraft):
    schedule_date: date = Field(..., title="Schedule Date")
    production_order_id: str | None = _relation("production_orders", "Production Order")
    machine_id: str | None = _relation("machines", "Machine")
    mold_id: str | None = _relation("molds", "Mold")
    shift: Literal["shift_a", "shift_b", "shift_c"] | None = Field(None, title="Shift")
    planned_quantity: int = Field(..., title="Planned Quantity", ge=0)
    actual_quantity: int | None = Field(None, title="Actual Quantity", ge=0)
    status: Literal["scheduled", "in_progress", "completed", "on_hold", "cancelled"] = Field(
        "scheduled", title="Status"
    )
    notes: str | None = Field(None, title="Notes")
