import logging

from context import request_context

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s [%(request)s] %(message)s"


class RequestContextFilter(logging.Filter):
    """Stamp records with the method and path of the request being served"""

    def filter(self, record: logging.LogRecord) -> bool:
        request = request_context.get()
        record.request = f"{request.method} {request.url.path}" if request else "-"
        return True


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, datefmt="%H:%M:%S")
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, RequestContextFilter) for f in handler.filters):
            handler.addFilter(RequestContextFilter())
