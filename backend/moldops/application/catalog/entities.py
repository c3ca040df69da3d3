"""The entity catalogue — one definition per dashboard page."""

from moldops.application.schemas import drafts
from moldops.domain.entities import ColumnSpec as Col
from moldops.domain.exceptions import EntityNotFoundError

from . import renderers as r
from .definition import EntityDefinition, RelationLookup

ADMIN = "admin"
PRODUCTION_MANAGER = "production_manager"
PRODUCTION_STAFF = "production_staff"
WAREHOUSE_STAFF = "warehouse_staff"
SALES_STAFF = "sales_staff"
QUALITY_INSPECTOR = "quality_inspector"
PURCHASE_MANAGER = "purchase_manager"
FINANCE_MANAGER = "finance_manager"
MAINTENANCE_STAFF = "maintenance_staff"


def _roles(*names: str) -> frozenset[str]:
    return frozenset(names)


MACHINES = RelationLookup("machines", "id, name, machine_code")
MOLDS = RelationLookup("molds", "id, name, mold_code")
PRODUCTS = RelationLookup("products", "id, name, product_code")
CUSTOMERS = RelationLookup("customers", "id, company_name, contact_person", "company_name")
SUPPLIERS = RelationLookup("suppliers", "id, company_name", "company_name")
RAW_MATERIALS = RelationLookup("raw_materials", "id, name, material_code, unit_of_measure")
SALES_ORDERS = RelationLookup("sales_orders", "id, order_number", "order_number")
PRODUCTION_ORDERS = RelationLookup(
    "production_orders", "id, order_number, product_id, mold_id, actual_quantity", "order_number"
)


ENTITIES: tuple[EntityDefinition, ...] = (
    EntityDefinition(
        slug="users",
        title="Users",
        singular="User",
        table="users",
        columns=(
            "id, username, email, first_name, last_name, employee_id, department, "
            "position, phone, is_active, profile_picture_url"
        ),
        draft_model=drafts.UserDraft,
        permitted_roles=_roles(ADMIN),
        filter_key="department",
        column_specs=(
            Col("employee_id", "Employee ID"),
            Col("username", "Username"),
            Col("first_name", "Full Name", r.full_name),
            Col("email", "Email"),
            Col("department", "Department"),
            Col("position", "Position"),
            Col("phone", "Phone"),
            Col("is_active", "Status", r.active_flag),
        ),
    ),
    EntityDefinition(
        slug="machines",
        title="Machines",
        singular="Machine",
        table="machines",
        columns=(
            "id, machine_code, name, machine_type, brand, model, serial_number, "
            "year_manufactured, tonnage, shot_size_capacity, status, location, "
            "installation_date, last_maintenance_date, next_maintenance_date, "
            "total_operating_hours, total_shots, hourly_rate"
        ),
        draft_model=drafts.MachineDraft,
        permitted_roles=_roles(ADMIN, PRODUCTION_MANAGER),
        filter_key="machine_type",
        column_specs=(
            Col("machine_code", "Code"),
            Col("name", "Name"),
            Col("machine_type", "Type"),
            Col("brand", "Brand"),
            Col("model", "Model"),
            Col("tonnage", "Tonnage"),
            Col("status", "Status"),
            Col("location", "Location"),
            Col("total_operating_hours", "Operating Hours", r.thousands),
            Col("hourly_rate", "Rate/Hour", r.money_plain),
        ),
    ),
    EntityDefinition(
        slug="molds",
        title="Molds",
        singular="Mold",
        table="molds",
        columns=(
            "id, mold_code, name, mold_type, number_of_cavities, material, weight, "
            "dimensions_length, dimensions_width, dimensions_height, cycle_time_standard, "
            "current_shot_count, condition_rating, location, status, purchase_date, "
            "purchase_cost, supplier, image_url"
        ),
        draft_model=drafts.MoldDraft,
        permitted_roles=_roles(ADMIN, PRODUCTION_MANAGER),
        filter_key="mold_type",
        column_specs=(
            Col("mold_code", "Code"),
            Col("name", "Name"),
            Col("mold_type", "Type"),
            Col("number_of_cavities", "Cavities"),
            Col("material", "Material"),
            Col("weight", "Weight (kg)", r.fixed2),
            Col("cycle_time_standard", "Cycle Time (s)", r.fixed2),
            Col("current_shot_count", "Shot Count", r.thousands),
            Col("condition_rating", "Condition"),
            Col("status", "Status"),
            Col("image_url", "Image"),
        ),
    ),
    EntityDefinition(
        slug="products",
        title="Products",
        singular="Product",
        table="products",
        columns="id, product_code, name, category, material_type, weight_per_piece, image_url, status",
        draft_model=drafts.ProductDraft,
        permitted_roles=_roles(ADMIN, PRODUCTION_MANAGER),
        filter_key="category",
        column_specs=(
            Col("product_code", "Code"),
            Col("name", "Name"),
            Col("category", "Category"),
            Col("material_type", "Material Type"),
            Col("weight_per_piece", "Weight (g)"),
            Col("image_url", "Image"),
            Col("status", "Status"),
        ),
    ),
    EntityDefinition(
        slug="raw-materials",
        title="Raw Materials",
        singular="Raw Material",
        add_label="Material",
        table="raw_materials",
        columns=(
            "id, material_code, name, description, category, material_type, supplier, "
            "unit_of_measure, current_stock, minimum_stock, maximum_stock, reorder_point, "
            "reorder_quantity, unit_cost, storage_location, shelf_life_days, is_active, image_url"
        ),
        draft_model=drafts.RawMaterialDraft,
        permitted_roles=_roles(ADMIN, WAREHOUSE_STAFF),
        filter_key="category",
        column_specs=(
            Col("material_code", "Code"),
            Col("name", "Name"),
            Col("category", "Category"),
            Col("material_type", "Type"),
            Col("supplier", "Supplier"),
            Col("current_stock", "Current Stock", r.with_unit("unit_of_measure", grouped=False)),
            Col("minimum_stock", "Min Stock", r.with_unit("unit_of_measure", grouped=False)),
            Col("unit_cost", "Unit Cost", r.money),
            Col("stock_status", "Stock Status", r.stock_status),
            Col("is_active", "Status", r.active_flag),
        ),
    ),
    EntityDefinition(
        slug="production-orders",
        title="Production Orders",
        singular="Production Order",
        table="production_orders",
        columns=(
            "id, order_number, product_id, mold_id, machine_id, target_quantity, "
            "actual_quantity, ng_quantity, scheduled_start_date, scheduled_end_date, "
            "actual_start_date, actual_end_date, setup_time_minutes, breakdown_time_minutes, "
            "cycle_time_standard, cycle_time_actual, priority_level, status, notes"
        ),
        draft_model=drafts.ProductionOrderDraft,
        permitted_roles=_roles(ADMIN, PRODUCTION_MANAGER),
        filter_key="status",
        relations=(PRODUCTS, MACHINES, MOLDS),
        legacy_paths=("/production",),
        column_specs=(
            Col("order_number", "Order Number"),
            Col("product_id", "Product ID"),
            Col("machine_id", "Machine ID"),
            Col("target_quantity", "Target Qty", r.thousands),
            Col("actual_quantity", "Actual Qty", r.thousands),
            Col("ng_quantity", "NG Qty", r.thousands),
            Col("progress", "Progress", r.percentage("actual_quantity", "target_quantity")),
            Col("scheduled_start_date", "Start Date"),
            Col("scheduled_end_date", "End Date"),
            Col("priority_level", "Priority"),
            Col("status", "Status"),
        ),
    ),
    EntityDefinition(
        slug="finished-goods",
        title="Finished Goods",
        singular="Finished Good",
        table="finished_goods_inventory",
        columns=(
            "id, product_id, production_order_id, batch_number, quantity, production_date, "
            "expiry_date, quality_status, location_id, unit_cost, total_cost, status, notes"
        ),
        draft_model=drafts.FinishedGoodDraft,
        permitted_roles=_roles(ADMIN, WAREHOUSE_STAFF),
        filter_key="quality_status",
        relations=(PRODUCTS, PRODUCTION_ORDERS),
        legacy_paths=("/inventory",),
        column_specs=(
            Col("product_id", "Product ID"),
            Col("batch_number", "Batch Number"),
            Col("quantity", "Quantity", r.thousands),
            Col("production_date", "Production Date"),
            Col("expiry_date", "Expiry Date"),
            Col("quality_status", "Quality Status"),
            Col("unit_cost", "Unit Cost", r.money),
            Col("total_cost", "Total Value", r.money),
            Col("status", "Status"),
        ),
    ),
    EntityDefinition(
        slug="customers",
        title="Customers",
        singular="Customer",
        table="customers",
        columns=(
            "id, customer_code, company_name, contact_person, email, phone, address, city, "
            "state_province, postal_code, country, payment_terms, credit_limit, tax_id, "
            "customer_type, status, sales_representative"
        ),
        draft_model=drafts.CustomerDraft,
        permitted_roles=_roles(ADMIN, SALES_STAFF),
        filter_key="customer_type",
        column_specs=(
            Col("customer_code", "Code"),
            Col("company_name", "Company Name"),
            Col("contact_person", "Contact Person"),
            Col("email", "Email"),
            Col("phone", "Phone"),
            Col("city", "City"),
            Col("country", "Country"),
            Col("credit_limit", "Credit Limit", r.money_grouped),
            Col("customer_type", "Type"),
            Col("status", "Status"),
        ),
    ),
    EntityDefinition(
        slug="sales-orders",
        title="Sales Orders",
        singular="Sales Order",
        table="sales_orders",
        columns=(
            "id, order_number, customer_id, order_date, required_date, promised_date, "
            "delivery_date, status, total_amount, currency, payment_status, payment_terms, "
            "sales_person, priority_level, notes"
        ),
        draft_model=drafts.SalesOrderDraft,
        permitted_roles=_roles(ADMIN, SALES_STAFF),
        filter_key="status",
        relations=(CUSTOMERS,),
        legacy_paths=("/sales",),
        column_specs=(
            Col("order_number", "Order Number"),
            Col("customer_id", "Customer ID"),
            Col("order_date", "Order Date"),
            Col("required_date", "Required Date"),
            Col("delivery_date", "Delivery Date"),
            Col("total_amount", "Total Amount", r.currency_amount),
            Col("status", "Status"),
            Col("payment_status", "Payment"),
            Col("priority_level", "Priority"),
            Col("sales_person", "Sales Person"),
        ),
    ),
    EntityDefinition(
        slug="quality-control",
        title="Quality Control",
        singular="Quality Inspection",
        add_label="Inspection",
        table="quality_inspection_reports",
        columns=(
            "id, production_order_id, inspection_type, inspection_datetime, inspector_id, "
            "sample_size, pass_quantity, fail_quantity, overall_result, action_taken, notes"
        ),
        draft_model=drafts.QualityInspectionDraft,
        permitted_roles=_roles(ADMIN, QUALITY_INSPECTOR),
        filter_key="inspection_type",
        relations=(PRODUCTION_ORDERS,),
        legacy_paths=("/quality",),
        column_specs=(
            Col("production_order_id", "Production Order"),
            Col("inspection_type", "Inspection Type"),
            Col("inspection_datetime", "Date & Time", r.timestamp),
            Col("inspector_id", "Inspector"),
            Col("sample_size", "Sample Size", r.thousands),
            Col("pass_quantity", "Pass Qty", r.thousands),
            Col("fail_quantity", "Fail Qty", r.thousands),
            Col("pass_rate", "Pass Rate", r.pass_rate),
            Col("overall_result", "Result"),
        ),
    ),
    EntityDefinition(
        slug="maintenance",
        title="Maintenance Schedule",
        singular="Maintenance Schedule",
        table="machine_maintenance_schedule",
        columns=(
            "id, machine_id, maintenance_type, maintenance_item, description, frequency_days, "
            "estimated_duration_hours, last_performed, next_due_date, responsible_person, "
            "priority_level, is_active"
        ),
        draft_model=drafts.MaintenanceScheduleDraft,
        permitted_roles=_roles(ADMIN, PRODUCTION_MANAGER),
        filter_key="maintenance_type",
        relations=(MACHINES,),
        column_specs=(
            Col("machine_id", "Machine ID"),
            Col("maintenance_type", "Type"),
            Col("maintenance_item", "Item"),
            Col("frequency_days", "Frequency", r.suffixed("days")),
            Col("estimated_duration_hours", "Duration", r.suffixed("hours")),
            Col("last_performed", "Last Performed"),
            Col("next_due_date", "Next Due", r.maintenance_due),
            Col("responsible_person", "Responsible"),
            Col("priority_level", "Priority"),
            Col("is_active", "Status", r.active_flag),
        ),
    ),
    EntityDefinition(
        slug="purchase-orders",
        title="Purchase Orders",
        singular="Purchase Order",
        table="purchase_orders",
        columns=(
            "id, po_number, supplier_name, supplier_contact, order_date, required_date, status, "
            "total_amount, currency, payment_terms, delivery_terms, created_by, approved_by, notes"
        ),
        draft_model=drafts.PurchaseOrderDraft,
        permitted_roles=_roles(ADMIN, WAREHOUSE_STAFF),
        filter_key="status",
        column_specs=(
            Col("po_number", "PO Number"),
            Col("supplier_name", "Supplier"),
            Col("order_date", "Order Date"),
            Col("required_date", "Required Date"),
            Col("total_amount", "Total Amount", r.currency_amount),
            Col("status", "Status"),
            Col("payment_terms", "Payment Terms"),
            Col("created_by", "Created By"),
            Col("approved_by", "Approved By"),
        ),
    ),
    EntityDefinition(
        slug="suppliers",
        title="Suppliers",
        singular="Supplier",
        table="suppliers",
        columns=(
            "id, supplier_code, company_name, contact_person, email, phone, address, city, "
            "state_province, postal_code, country, payment_terms, status, notes"
        ),
        draft_model=drafts.SupplierDraft,
        permitted_roles=_roles(ADMIN, PURCHASE_MANAGER),
        filter_key="status",
        column_specs=(
            Col("supplier_code", "Code"),
            Col("company_name", "Company Name"),
            Col("contact_person", "Contact Person"),
            Col("email", "Email"),
            Col("phone", "Phone"),
            Col("country", "Country"),
            Col("payment_terms", "Payment Terms"),
            Col("status", "Status"),
        ),
    ),
    EntityDefinition(
        slug="containers",
        title="Containers",
        singular="Container",
        table="containers",
        columns=(
            "id, container_code, container_type, capacity_value, capacity_unit, "
            "current_fill_level, location, status, last_cleaned_date, notes"
        ),
        draft_model=drafts.ContainerDraft,
        permitted_roles=_roles(ADMIN, WAREHOUSE_STAFF),
        filter_key="status",
        column_specs=(
            Col("container_code", "Code"),
            Col("container_type", "Type"),
            Col("capacity_value", "Capacity", r.with_unit("capacity_unit")),
            Col("current_fill_level", "Fill Level", r.fill_level),
            Col("location", "Location"),
            Col("status", "Status"),
            Col("last_cleaned_date", "Last Cleaned"),
        ),
    ),
    EntityDefinition(
        slug="customer-complaints",
        title="Customer Complaints",
        singular="Customer Complaint",
        add_label="Complaint",
        table="customer_complaints",
        columns=(
            "id, complaint_number, customer_id, product_id, sales_order_id, complaint_date, "
            "description, severity, status, resolution_date, action_taken, responsible_person, "
            "notes, customers(company_name), products(name)"
        ),
        draft_model=drafts.CustomerComplaintDraft,
        permitted_roles=_roles(ADMIN, SALES_STAFF, QUALITY_INSPECTOR),
        filter_key="status",
        relations=(CUSTOMERS, PRODUCTS, SALES_ORDERS),
        column_specs=(
            Col("complaint_number", "Complaint No."),
            Col("customer_id", "Customer", r.relation_name("customers", "company_name")),
            Col("product_id", "Product", r.relation_name("products", "name")),
            Col("complaint_date", "Complaint Date"),
            Col("severity", "Severity"),
            Col("status", "Status"),
            Col("resolution_date", "Resolution Date"),
            Col("responsible_person", "Responsible"),
        ),
    ),
    EntityDefinition(
        slug="production-costs",
        title="Production Costs",
        singular="Production Cost",
        add_label="Cost Record",
        table="production_costs",
        columns=(
            "id, production_order_id, cost_date, material_cost, labor_cost, machine_cost, "
            "overhead_cost, total_cost, unit_cost, notes, production_orders(order_number, actual_quantity)"
        ),
        draft_model=drafts.ProductionCostDraft,
        permitted_roles=_roles(ADMIN, FINANCE_MANAGER),
        relations=(PRODUCTION_ORDERS,),
        column_specs=(
            Col("production_order_id", "Production Order", r.relation_name("production_orders", "order_number")),
            Col("cost_date", "Cost Date"),
            Col("material_cost", "Material Cost", r.money),
            Col("labor_cost", "Labor Cost", r.money),
            Col("machine_cost", "Machine Cost", r.money),
            Col("overhead_cost", "Overhead Cost", r.money),
            Col("total_cost", "Total Cost", r.money),
            Col("unit_cost", "Unit Cost", r.money),
        ),
    ),
    EntityDefinition(
        slug="machine-downtime",
        title="Machine Downtime",
        singular="Downtime Record",
        table="machine_downtime",
        columns=(
            "id, machine_id, downtime_start, downtime_end, duration_minutes, reason, "
            "action_taken, reported_by, status, notes, machines(name, machine_code)"
        ),
        draft_model=drafts.MachineDowntimeDraft,
        permitted_roles=_roles(ADMIN, PRODUCTION_MANAGER, MAINTENANCE_STAFF),
        filter_key="status",
        relations=(MACHINES,),
        column_specs=(
            Col("machine_id", "Machine", r.relation_name("machines", "name")),
            Col("downtime_start", "Start Time", r.timestamp),
            Col("downtime_end", "End Time", r.timestamp),
            Col("duration_minutes", "Duration (min)", r.thousands),
            Col("reason", "Reason"),
            Col("reported_by", "Reported By"),
            Col("status", "Status"),
        ),
    ),
    EntityDefinition(
        slug="material-batches",
        title="Material Batches",
        singular="Material Batch",
        table="material_batches",
        columns=(
            "id, batch_number, material_id, quantity, unit_of_measure, received_date, "
            "expiry_date, supplier_id, unit_cost, total_cost, storage_location, status, notes, "
            "raw_materials(name, material_code, unit_of_measure), suppliers(company_name)"
        ),
        draft_model=drafts.MaterialBatchDraft,
        permitted_roles=_roles(ADMIN, WAREHOUSE_STAFF),
        filter_key="status",
        relations=(RAW_MATERIALS, SUPPLIERS),
        column_specs=(
            Col("batch_number", "Batch Number"),
            Col("material_id", "Material", r.relation_name("raw_materials", "name")),
            Col("quantity", "Quantity", r.with_unit("unit_of_measure")),
            Col("received_date", "Received Date"),
            Col("expiry_date", "Expiry Date"),
            Col("supplier_id", "Supplier", r.relation_name("suppliers", "company_name")),
            Col("unit_cost", "Unit Cost", r.money),
            Col("total_cost", "Total Cost", r.money),
            Col("storage_location", "Location"),
            Col("status", "Status"),
        ),
    ),
    EntityDefinition(
        slug="work-orders",
        title="Work Orders",
        singular="Work Order",
        table="work_orders",
        columns=(
            "id, work_order_number, order_type, description, machine_id, mold_id, product_id, "
            "priority_level, status, assigned_to, scheduled_start_date, scheduled_end_date, "
            "actual_start_date, actual_end_date, notes, machines(name, machine_code), "
            "molds(name, mold_code), products(name, product_code)"
        ),
        draft_model=drafts.WorkOrderDraft,
        permitted_roles=_roles(ADMIN, MAINTENANCE_STAFF, PRODUCTION_MANAGER),
        filter_key="status",
        relations=(MACHINES, MOLDS, PRODUCTS),
        column_specs=(
            Col("work_order_number", "WO Number"),
            Col("order_type", "Type"),
            Col("machine_id", "Machine", r.relation_name("machines", "name")),
            Col("mold_id", "Mold", r.relation_name("molds", "name")),
            Col("product_id", "Product", r.relation_name("products", "name")),
            Col("priority_level", "Priority"),
            Col("status", "Status"),
            Col("assigned_to", "Assigned To"),
            Col("scheduled_start_date", "Scheduled Start"),
        ),
    ),
    EntityDefinition(
        slug="daily-production-schedule",
        title="Daily Production Schedule",
        singular="Schedule Entry",
        table="daily_production_schedule",
        columns=(
            "id, schedule_date, production_order_id, machine_id, mold_id, shift, planned_quantity, "
            "actual_quantity, status, notes, "
            "production_orders(order_number, product_id, molds(name, mold_code)), "
            "machines(name, machine_code)"
        ),
        draft_model=drafts.DailyProductionScheduleDraft,
        permitted_roles=_roles(ADMIN, PRODUCTION_MANAGER, PRODUCTION_STAFF),
        filter_key="status",
        relations=(PRODUCTION_ORDERS, MACHINES, MOLDS),
        column_specs=(
            Col("schedule_date", "Date"),
            Col(
                "production_order_id",
                "Production Order",
                r.relation_name("production_orders", "order_number"),
            ),
            Col("machine_id", "Machine", r.relation_name("machines", "name")),
            Col("mold_id", "Mold", r.relation_name("production_orders", "molds", "name")),
            Col("shift", "Shift"),
            Col("planned_quantity", "Planned Qty", r.thousands),
            Col("actual_quantity", "Actual Qty", r.thousands),
            Col("progress", "Progress", r.percentage("actual_quantity", "planned_quantity")),
            Col("status", "Status"),
        ),
    ),
)

_BY_SLUG: dict[str, EntityDefinition] = {entity.slug: entity for entity in ENTITIES}


def list_entities() -> list[EntityDefinition]:
    return list(ENTITIES)


def get_entity(slug: str) -> EntityDefinition:
    """Look up a definition by its page slug.

    Raises:
        EntityNotFoundError: if no page has that slug.
    """
    try:
        return _BY_SLUG[slug]
    except KeyError:
        raise EntityNotFoundError("Entity type", slug) from None
