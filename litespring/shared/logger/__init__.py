from litespring.shared.logger.structured_logger import StructuredLogger

__all__ = ["StructuredLogger"]
