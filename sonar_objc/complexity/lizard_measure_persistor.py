import logging
from pathlib import Path

from sonar_objc.api import DuplicateMeasureError

logger = logging.getLogger(__name__)


class LizardMeasurePersistor:
    """Write parsed Lizard measures through the sensor context."""

    def __init__(self, project, context, file_system) -> None:
        self.project = project
        self.context = context
        self.file_system = file_system

    def save_measures(self, measures: dict | None) -> None:
        if measures is None:
            return

        for file_name, file_measures in measures.items():
            input_file = self.file_system.input_file(Path(self.file_system.base_dir) / file_name)
            if input_file is None:
                logger.debug("File '%s' is not part of project '%s', skipping",
                             file_name, self.project.key)
                continue

            for measure in file_measures:
                logger.debug("Save measure %s for file %s", measure.metric.name, input_file.relative_path)
                try:
                    self.context.save_measure(input_file, measure)
                except DuplicateMeasureError as exc:
                    logger.error("%s -> %s: %s", file_name, measure.metric.name, exc)
