"""
Output Formatter for exporting flight statistics.

Supports two output formats:
- text: The fixed-width report table
- json: Per-station statistics with metadata
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from balloon_stats import __version__
from balloon_stats.pipeline.stats import FlightStatsPipeline

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("text", "json")


class ReportFormatter:
    """Formatter for flight statistics reports.

    Example:
        >>> formatter = ReportFormatter()
        >>> print(formatter.render(pipeline, format="text"))
        >>> formatter.save(pipeline, "stats.json", format="json")
    """

    def render(self, pipeline: FlightStatsPipeline, format: str = "text") -> str:
        """Render a pipeline's statistics as a string.

        Args:
            pipeline: Pipeline that has consumed its input
            format: "text" or "json"

        Raises:
            ValueError: If format is not supported
        """
        format = format.lower()
        if format == "text":
            return self._render_text(pipeline)
        elif format == "json":
            return json.dumps(self._to_document(pipeline), indent=2) + "\n"
        else:
            raise ValueError(f"Unsupported format: {format}")

    def save(
        self,
        pipeline: FlightStatsPipeline,
        output_path: str,
        format: str = "text",
    ) -> str:
        """Save a pipeline's statistics to a file.

        Returns:
            Path to saved file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        content = self.render(pipeline, format=format)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(content)

        logger.info(f"Saved {format} report to {output_path}")
        return str(output_path)

    def _render_text(self, pipeline: FlightStatsPipeline) -> str:
        return "\n".join(pipeline.report()) + "\n"

    def _to_document(self, pipeline: FlightStatsPipeline) -> Dict[str, Any]:
        kinds = pipeline.config.report.selected_kinds()
        stations = []
        for agg in pipeline.aggregators.values():
            entry: Dict[str, Optional[Any]] = {"station": agg.station}
            for kind in kinds:
                entry[kind.value] = agg.value(kind)
            stations.append(entry)

        return {
            "metadata": {
                "format_version": "1.0",
                "created": datetime.now().isoformat(),
                "software": f"balloon_stats {__version__}",
                "accepted_lines": pipeline.accepted,
                "discarded_lines": pipeline.discarded,
                "statistics": [kind.value for kind in kinds],
            },
            "stations": stations,
        }
