"""
Export of scraped data to JSON, CSV and XML
"""

from .data_exporter import DataExporter
from .registry import export, export_json, export_csv, export_xml, build_exporter_registry

__all__ = ['DataExporter', 'export', 'export_json', 'export_csv', 'export_xml', 'build_exporter_registry']
