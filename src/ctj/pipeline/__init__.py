"""Type inference and record assembly."""

from ctj.pipeline.assemble import assemble, build_record, column_key
from ctj.pipeline.classify import classify

__all__ = ["assemble", "build_record", "classify", "column_key"]
