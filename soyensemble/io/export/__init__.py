from .report_export import default_reports_dir, export_report, report_table

__all__ = ["default_reports_dir", "export_report", "report_table"]
