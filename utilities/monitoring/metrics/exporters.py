from abc import ABC, abstractmethod
from typing import Dict, List
import json
import os
from datetime import datetime, timezone

from .collectors import Metric


class MetricsExporter(ABC):
    @abstractmethod
    def export(self, metrics: Dict[str, List[Metric]]) -> str:
        """Persist collected metrics and return where they were written"""
        pass


class JSONFileExporter(MetricsExporter):
    def __init__(self, output_dir: str, prefix: str = "metrics"):
        self.output_dir = output_dir
        self.prefix = prefix

    def export(self, metrics: Dict[str, List[Metric]]) -> str:
        os.makedirs(self.output_dir, exist_ok=True)
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S_%f")
        output_file = os.path.join(self.output_dir, f"{self.prefix}_{timestamp}.json")

        metrics_data = {
            name: [metric.as_dict() for metric in metric_list]
            for name, metric_list in metrics.items()
        }

        with open(output_file, 'w') as f:
            json.dump(metrics_data, f, indent=2)
        return output_file
