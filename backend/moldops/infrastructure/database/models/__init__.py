from .table_row import TableRowModel

__all__ = ["TableRowModel"]
