from .xml_exporter import (
    ROOT_TAG,
    build_address_book,
    render_address_book,
    export_filename,
    export_xml,
)

__all__ = ["ROOT_TAG", "build_address_book", "render_address_book", "export_filename", "export_xml"]
