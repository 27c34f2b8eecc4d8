import logging
import sys


class ContextFormatter(logging.Formatter):
    """Formatter that fills in the optional project and step fields."""
    def format(self, record):
        if not hasattr(record, 'project'):
            record.project = '-'
        if not hasattr(record, 'step'):
            record.step = '-'
        return super().format(record)


def configure_logging(level: int = logging.INFO) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ContextFormatter(
        "%(asctime)s %(levelname)s %(name)s [project=%(project)s step=%(step)s] - %(message)s"
    ))
    logging.basicConfig(
        level=level,
        handlers=[handler],
    )
