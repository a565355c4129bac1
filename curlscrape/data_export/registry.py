"""
Exporter registry - maps a file suffix to an export strategy

The registry is a plain dict built once by build_exporter_registry() and
passed to export() wherever a non-default set of strategies is needed.

Usage:
    from curlscrape.data_export import export, build_exporter_registry

    registry = build_exporter_registry()
    export("results.csv", records, registry)
"""

from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from ..diagnostics import get_logger
from ..exceptions import ConfigurationError
from .data_exporter import DataExporter

logger = get_logger(__name__)

ExportStrategy = Callable[[Any, Union[str, Path]], str]


def export_json(data: Any, file_path: Union[str, Path], **kwargs) -> str:
    """Quick JSON export"""
    return DataExporter(data).to_json(file_path, **kwargs)


def export_csv(data: Any, file_path: Union[str, Path], **kwargs) -> str:
    """Quick CSV export"""
    return DataExporter(data).to_csv(file_path, **kwargs)


def export_xml(data: Any, file_path: Union[str, Path], **kwargs) -> str:
    """Quick XML export"""
    return DataExporter(data).to_xml(file_path, **kwargs)


def build_exporter_registry() -> Dict[str, ExportStrategy]:
    return {
        "json": export_json,
        "csv": export_csv,
        "xml": export_xml,
    }


def export(
    file_path: Union[str, Path],
    data: Any,
    registry: Optional[Dict[str, ExportStrategy]] = None,
) -> str:
    """
    Write data to file_path using the strategy picked by its suffix.

    Args:
        file_path: Destination, e.g. "out/products.csv"
        data: Records to export
        registry: Suffix -> strategy mapping (default: json, csv, xml)

    Returns:
        The serialized content

    Raises:
        ConfigurationError: Missing or unsupported file suffix
    """
    registry = registry if registry is not None else build_exporter_registry()
    allowed = ", ".join(sorted(registry))

    suffix = Path(file_path).suffix.lstrip(".").lower()
    if not suffix:
        raise ConfigurationError(
            f"No filetype given for export path '{file_path}'. Supported filetypes: {allowed}"
        )

    strategy = registry.get(suffix)
    if strategy is None:
        raise ConfigurationError(
            f"Unsupported export filetype '{suffix}'. Supported filetypes: {allowed}"
        )

    Path(file_path).parent.mkdir(parents=True, exist_ok=True)
    content = strategy(data, file_path)
    logger.info(f"Exported {suffix.upper()} to {file_path}")
    return content
