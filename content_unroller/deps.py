from .config import settings
from .services.content_reader import ContentReader, content_reader
from .services.unrollers import UniversalUnroller

_unroller = UniversalUnroller(content_reader, settings.api_host, settings.ccc_max_depth)


def get_content_reader() -> ContentReader:
    return content_reader


def get_unroller() -> UniversalUnroller:
    return _unroller
