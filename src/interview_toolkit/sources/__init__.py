"""
Module: sources

Purpose:
    Job description input. Text, JSON and YAML files are parsed into
    JobDescription records.

Key Functions:
    - parse_job_description(): Parse a file by extension
    - get_parser(): Parser lookup

Used By:
    - builder.controller: Main build controller
"""

from .parser import (
    JsonJobDescriptionParser,
    ParseError,
    TextJobDescriptionParser,
    YamlJobDescriptionParser,
    get_parser,
    parse_job_description,
)

__all__ = [
    "JsonJobDescriptionParser",
    "ParseError",
    "TextJobDescriptionParser",
    "YamlJobDescriptionParser",
    "get_parser",
    "parse_job_description",
]
