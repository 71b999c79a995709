"""
Module: sources.parser

Purpose:
    Parse job description files into JobDescription records.
    Plain text files are scanned for "Label:" lines and keyword sections;
    JSON and YAML files are read field by field with several accepted key
    names.

Key Functions:
    - get_parser(): Pick a parser by file extension
    - parse_job_description(): Parse a file with the matching parser

Key Classes:
    - TextJobDescriptionParser: .txt files
    - JsonJobDescriptionParser: .json files
    - YamlJobDescriptionParser: .yaml / .yml files
    - ParseError: Exception for parse failures

Dependencies:
    - json, re (std)
    - PyYAML: YAML job descriptions
    - interview_toolkit.core.models: JobDescription

Used By:
    - builder.controller: Main build controller
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from interview_toolkit.core.models import DEFAULT_JOB_TITLE, UNKNOWN_COMPANY, JobDescription

logger = logging.getLogger(__name__)


class ParseError(Exception):
    """Error parsing a job description file."""
    pass


SKILL_KEYWORDS = (
    "skills", "requirements", "qualifications", "technical skills",
    "required skills", "technical requirements", "competencies",
)

RESPONSIBILITY_KEYWORDS = (
    "responsibilities", "duties", "job duties", "key responsibilities",
    "what you'll do", "role responsibilities", "job responsibilities",
)

TECHNOLOGY_KEYWORDS = (
    "technologies", "tech stack", "technical environment", "tools",
    "programming languages", "frameworks", "software", "platforms",
)

# Checked in order against each skill; the first contained keyword wins
TECH_TERMS = (
    "java", "spring", "spring boot", "hibernate", "jpa", "sql", "nosql", "mongodb",
    "postgresql", "mysql", "oracle", "aws", "azure", "gcp", "docker", "kubernetes",
    "microservices", "rest", "soap", "api", "git", "jenkins", "ci/cd", "junit",
    "mockito", "maven", "gradle", "kafka", "rabbitmq", "redis", "elasticsearch",
)

_TITLE_RE = re.compile(r"^\s*(?:job title|position|role)\s*:\s*(.+?)\s*$", re.IGNORECASE | re.MULTILINE)
_COMPANY_RE = re.compile(r"^\s*(?:company|organization|employer)\s*:\s*(.+?)\s*$", re.IGNORECASE | re.MULTILINE)
# Any "Word:" line ends the current section
_LABEL_LINE_RE = re.compile(r"^\s*[A-Za-z][A-Za-z '/&-]*:")
_BULLET_RE = re.compile(r"^\s*(?:•|-|\*|\d+\.)\s*")
_SENTENCE_SPLIT_RE = re.compile(r"[.,]\s+")
_JSON_SPLIT_RE = re.compile(r"[,;\n]+")


def _dedupe(items: Sequence[str]) -> List[str]:
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


class TextJobDescriptionParser:
    """
    Parser for free-form text job descriptions.

    Recognized layout:
        Job Title: Senior Java Developer
        Company: Acme Corp

        Skills:
        - Java 17
        - Spring Boot

    Sections start at a line beginning with a keyword (optionally followed by
    ":" and inline content) and run until a blank line or the next "Label:"
    line. Bulleted sections give one item per bullet; prose sections are
    split on ". " and ", ".
    """

    extensions = (".txt",)

    def can_parse(self, path: Path) -> bool:
        return path.suffix.lower() in self.extensions

    def parse(self, path: Path) -> JobDescription:
        """
        Parse a text job description.

        Raises:
            ParseError: If the file cannot be read
        """
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(f"Cannot read job description {path}: {e}") from e
        return self.parse_text(content)

    def parse_text(self, content: str) -> JobDescription:
        """Parse job description text already in memory."""
        lines = content.replace("\r\n", "\n").split("\n")

        title_match = _TITLE_RE.search(content)
        if title_match:
            title = title_match.group(1)
        else:
            first = next((line.strip() for line in lines if line.strip()), "")
            title = first or DEFAULT_JOB_TITLE

        company_match = _COMPANY_RE.search(content)
        company = company_match.group(1) if company_match else UNKNOWN_COMPANY

        skills = self._extract_section(lines, SKILL_KEYWORDS)
        responsibilities = self._extract_section(lines, RESPONSIBILITY_KEYWORDS)
        technologies = self._extract_section(lines, TECHNOLOGY_KEYWORDS)
        if not technologies:
            technologies = self._technologies_from_skills(skills)
            if technologies:
                logger.debug(f"Inferred technologies from skills: {technologies}")

        return JobDescription(
            title=title,
            company=company,
            skills=tuple(skills),
            responsibilities=tuple(responsibilities),
            technologies=tuple(technologies),
            description=content,
        )

    def _extract_section(self, lines: List[str], keywords: Sequence[str]) -> List[str]:
        """Items of the first keyword section that yields any."""
        for keyword in keywords:
            header = re.compile(rf"^\s*{re.escape(keyword)}\b\s*:?\s*(.*)$", re.IGNORECASE)
            for index, line in enumerate(lines):
                match = header.match(line)
                if not match:
                    continue
                body = self._section_body(match.group(1), lines[index + 1:])
                items = self._split_items(body)
                if items:
                    return items
        return []

    @staticmethod
    def _section_body(inline: str, following: List[str]) -> List[str]:
        body = [inline] if inline.strip() else []
        for line in following:
            if not line.strip():
                # Blank lines directly after a bare header are skipped
                if body:
                    break
                continue
            if _LABEL_LINE_RE.match(line) and not _BULLET_RE.match(line):
                break
            body.append(line)
        return body

    @staticmethod
    def _split_items(body: List[str]) -> List[str]:
        if any(_BULLET_RE.match(line) for line in body):
            items = [_BULLET_RE.sub("", line, count=1).strip() for line in body]
        else:
            items = [part.strip().rstrip(".") for part in _SENTENCE_SPLIT_RE.split(" ".join(body))]
        return [item for item in items if item]

    @staticmethod
    def _technologies_from_skills(skills: Sequence[str]) -> List[str]:
        found = []
        for skill in skills:
            lowered = skill.lower()
            for term in TECH_TERMS:
                if term in lowered:
                    found.append(term)
                    break
        return _dedupe(found)


class JsonJobDescriptionParser:
    """
    Parser for JSON job descriptions.

    Accepted keys (first present wins):
        title: "title", "jobTitle", "position"
        company: "company", "organization", "employer"
        skills: "skills", "requirements", "qualifications"
        responsibilities: "responsibilities", "duties", "jobDuties"
        technologies: "technologies", "techStack", "technicalEnvironment"

    List fields accept arrays of strings, arrays of objects carrying
    "name", "value" or "description", or one string split on , ; and newline.
    """

    extensions = (".json",)

    TITLE_KEYS = ("title", "jobTitle", "position")
    COMPANY_KEYS = ("company", "organization", "employer")
    SKILL_KEYS = ("skills", "requirements", "qualifications")
    RESPONSIBILITY_KEYS = ("responsibilities", "duties", "jobDuties")
    TECHNOLOGY_KEYS = ("technologies", "techStack", "technicalEnvironment")

    def can_parse(self, path: Path) -> bool:
        return path.suffix.lower() in self.extensions

    def parse(self, path: Path) -> JobDescription:
        """
        Parse a JSON job description.

        Raises:
            ParseError: If the file is unreadable, not JSON, or not an object
        """
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(f"Cannot read job description {path}: {e}") from e

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ParseError(f"Invalid JSON in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ParseError(f"Expected a JSON object in {path}, got {type(data).__name__}")

        return self.parse_dict(data, description=content)

    def parse_dict(self, data: Dict[str, Any], *, description: str = "") -> JobDescription:
        """Build a JobDescription from an already-decoded object."""
        title = self._first_string(data, self.TITLE_KEYS) or DEFAULT_JOB_TITLE
        company = self._first_string(data, self.COMPANY_KEYS) or UNKNOWN_COMPANY

        return JobDescription(
            title=title,
            company=company,
            skills=tuple(self._first_list(data, self.SKILL_KEYS)),
            responsibilities=tuple(self._first_list(data, self.RESPONSIBILITY_KEYS)),
            technologies=tuple(self._first_list(data, self.TECHNOLOGY_KEYS)),
            description=description,
        )

    @staticmethod
    def _first_string(data: Dict[str, Any], keys: Sequence[str]) -> Optional[str]:
        for key in keys:
            value = data.get(key)
            if value is not None and str(value).strip():
                return str(value).strip()
        return None

    @classmethod
    def _first_list(cls, data: Dict[str, Any], keys: Sequence[str]) -> List[str]:
        for key in keys:
            if key not in data:
                continue
            items = cls._list_items(data[key])
            if items:
                return items
        return []

    @staticmethod
    def _list_items(value: Any) -> List[str]:
        if isinstance(value, str):
            return [part.strip() for part in _JSON_SPLIT_RE.split(value) if part.strip()]
        if not isinstance(value, list):
            logger.debug(f"Ignoring list field of type {type(value).__name__}")
            return []

        items = []
        for item in value:
            if isinstance(item, str):
                if item.strip():
                    items.append(item.strip())
            elif isinstance(item, dict):
                for field_name in ("name", "value", "description"):
                    text = item.get(field_name)
                    if isinstance(text, str) and text.strip():
                        items.append(text.strip())
                        break
        return items


class YamlJobDescriptionParser:
    """
    Parser for YAML job descriptions.

    Accepts the same keys and list shapes as JsonJobDescriptionParser:

        title: Senior Java Developer
        company: Acme Corp
        skills:
          - Java 17
          - name: Spring Boot
        technologies: Docker, Kubernetes
    """

    extensions = (".yaml", ".yml")

    def __init__(self) -> None:
        self._fields = JsonJobDescriptionParser()

    def can_parse(self, path: Path) -> bool:
        return path.suffix.lower() in self.extensions

    def parse(self, path: Path) -> JobDescription:
        """
        Parse a YAML job description.

        Raises:
            ParseError: If the file is unreadable, not YAML, or not a mapping
        """
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(f"Cannot read job description {path}: {e}") from e

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ParseError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ParseError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

        return self._fields.parse_dict(data, description=content)


_PARSERS = (TextJobDescriptionParser(), JsonJobDescriptionParser(), YamlJobDescriptionParser())


def get_parser(path: Path):
    """
    Pick the parser for a file by extension.

    Raises:
        ParseError: If no parser handles the extension

    Example:
        >>> get_parser(Path("jd.json"))
        <...JsonJobDescriptionParser object at ...>
    """
    for parser in _PARSERS:
        if parser.can_parse(path):
            return parser
    raise ParseError(f"No parser available for file: {path}")


def parse_job_description(path: Path) -> JobDescription:
    """
    Parse a job description file.

    Args:
        path: .txt, .json, .yaml or .yml file

    Returns:
        JobDescription

    Raises:
        ParseError: Unsupported extension or unreadable/invalid file
    """
    parser = get_parser(path)
    job = parser.parse(path)
    logger.info(
        f"Parsed job description {path.name}: {job.title!r} "
        f"({len(job.skills)} skills, {len(job.technologies)} technologies)"
    )
    return job
