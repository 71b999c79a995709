"""
Module: questions.catalog

Purpose:
    Offline question source. Picks categories from the skills in a job
    description, draws curated questions from the bundled question bank and
    fills any shortfall with templated questions built from per-category
    topic lists.

Key Functions:
    - load_question_bank(): Read curated questions from JSON
    - split_skills(): Comma-separated skills -> list

Key Classes:
    - CategoryRule: Category name, target count, trigger keywords, topics
    - QuestionCatalog: Category selection and question sampling
    - CatalogError: Exception for unreadable question banks

Dependencies:
    - json, random (std)
    - interview_toolkit.core.models: InterviewQuestion, QuestionMap

Used By:
    - questions.supply: Fallback when generation is disabled or short
"""

from __future__ import annotations

import json
import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from interview_toolkit.core.models import (
    InterviewQuestion,
    JobDescription,
    QuestionMap,
    total_question_count,
)

logger = logging.getLogger(__name__)

DEFAULT_BANK_PATH = Path(__file__).resolve().parent.parent / "data" / "question_bank.json"
MINIMUM_TOTAL = 100


class CatalogError(Exception):
    """Error loading the question bank."""
    pass


@dataclass(frozen=True)
class CategoryRule:
    """
    One catalog category.

    Attributes:
        name: Category name, also the section title stem
        target: Questions drawn when the category is selected
        keywords: Lower-case substrings that select the category;
            empty means always selected
        topics: Topic names cycled through by the templates
        question_templates: "{topic}" templates, one full topic cycle each
        answer_template: "{topic}" template for templated answers
    """
    name: str
    target: int
    keywords: tuple[str, ...]
    topics: tuple[str, ...]
    question_templates: tuple[str, ...]
    answer_template: str

    @property
    def always_included(self) -> bool:
        return not self.keywords

    def matches(self, skills: Iterable[str]) -> bool:
        """True when any lower-cased skill contains any keyword."""
        return self.always_included or any(
            keyword in skill for skill in skills for keyword in self.keywords
        )

    def templated(self) -> Iterator[InterviewQuestion]:
        """All templated questions, topic-major within each template."""
        for template in self.question_templates:
            for topic in self.topics:
                yield InterviewQuestion(
                    category=self.name,
                    subcategory=topic,
                    question=template.format(topic=topic),
                    answer=self.answer_template.format(topic=topic),
                )


# Display order of the categories in the guide
CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(
        name="Core Java",
        target=30,
        keywords=(),
        topics=(
            "Java Fundamentals", "OOP Concepts", "Collections Framework", "Multithreading",
            "Exception Handling", "Java 8 Features", "Java 11 Features", "Java 17 Features",
            "Generics", "Annotations", "Reflection", "IO and NIO", "Serialization",
            "Memory Management", "JVM Architecture", "Garbage Collection",
        ),
        question_templates=(
            "Explain {topic} in Java and provide examples of its practical applications.",
            "What are the common pitfalls of {topic} in Java and how do you avoid them?",
            "How has {topic} evolved across recent Java releases?",
        ),
        answer_template=(
            "This is a detailed explanation of {topic} in Java, including examples, "
            "best practices, and common pitfalls."
        ),
    ),
    CategoryRule(
        name="Spring & Spring Boot",
        target=20,
        keywords=("spring", "spring boot", "springboot", "spring framework"),
        topics=(
            "Dependency Injection", "Spring IoC Container", "Spring AOP", "Spring MVC",
            "Spring Boot Autoconfiguration", "Spring Data JPA", "Spring Security",
            "Spring Cloud", "Spring Batch", "Spring Testing", "Spring Profiles",
            "Spring Boot Actuator", "Spring Boot Starters", "Spring WebFlux",
        ),
        question_templates=(
            "Explain {topic} and how it's used in Spring applications.",
            "What problems does {topic} solve in a Spring Boot service?",
        ),
        answer_template=(
            "This is a detailed explanation of {topic} in Spring, including examples, "
            "best practices, and common pitfalls."
        ),
    ),
    CategoryRule(
        name="REST API & Microservices",
        target=20,
        keywords=("rest", "api", "microservices", "micro services", "web services", "restful"),
        topics=(
            "REST Principles", "API Design", "Microservices Architecture", "Service Discovery",
            "API Gateway", "Circuit Breaker Pattern", "Distributed Tracing", "API Security",
            "API Versioning", "API Documentation", "Microservices Testing",
            "Event-Driven Architecture", "CQRS Pattern", "Saga Pattern", "Bulkhead Pattern",
        ),
        question_templates=(
            "Explain {topic} and its importance in modern application architecture.",
            "How would you apply {topic} when splitting a monolith into services?",
        ),
        answer_template=(
            "This is a detailed explanation of {topic} in the context of REST APIs and "
            "microservices, including examples, best practices, and common pitfalls."
        ),
    ),
    CategoryRule(
        name="Database & ORM",
        target=20,
        keywords=(
            "sql", "database", "db", "oracle", "mysql", "postgresql", "nosql",
            "mongodb", "hibernate", "jpa", "jdbc",
        ),
        topics=(
            "SQL Fundamentals", "Database Normalization", "Indexing", "Transactions",
            "ACID Properties", "Hibernate Architecture", "JPA Annotations", "Query Optimization",
            "Connection Pooling", "NoSQL Databases", "Database Sharding", "Database Replication",
            "ORM vs JDBC", "N+1 Problem", "Lazy Loading vs Eager Loading",
        ),
        question_templates=(
            "Explain {topic} and its importance in database design and performance.",
            "Describe a production issue caused by {topic} and how you would diagnose it.",
        ),
        answer_template=(
            "This is a detailed explanation of {topic} in the context of databases and ORM "
            "frameworks, including examples, best practices, and common pitfalls."
        ),
    ),
    CategoryRule(
        name="Cloud & Containerization",
        target=20,
        keywords=(
            "cloud", "aws", "azure", "gcp", "docker", "kubernetes", "k8s",
            "container", "devops", "ci/cd", "jenkins",
        ),
        topics=(
            "Docker Fundamentals", "Kubernetes Architecture", "Container Orchestration",
            "Cloud Service Models", "AWS Services", "Azure Services", "GCP Services",
            "Infrastructure as Code", "CI/CD Pipelines", "DevOps Practices",
            "Cloud Security", "Serverless Architecture", "Microservices Deployment",
            "Monitoring and Logging", "Auto-scaling",
        ),
        question_templates=(
            "Explain {topic} and its role in modern cloud-native applications.",
            "How would you introduce {topic} to a team deploying Java services?",
        ),
        answer_template=(
            "This is a detailed explanation of {topic} in the context of cloud computing and "
            "containerization, including examples, best practices, and common pitfalls."
        ),
    ),
    CategoryRule(
        name="System Design & Architecture",
        target=15,
        keywords=(),
        topics=(
            "Scalability", "High Availability", "Load Balancing", "Caching Strategies",
            "Database Design", "Microservices vs Monoliths", "API Gateway Pattern",
            "Event-Driven Architecture", "CQRS Pattern", "Saga Pattern",
            "Distributed Systems", "Message Queues", "Service Mesh",
            "Domain-Driven Design", "Hexagonal Architecture",
        ),
        question_templates=(
            "How would you implement {topic} in a large-scale distributed system?",
            "What trade-offs do you weigh when choosing {topic}?",
        ),
        answer_template=(
            "This is a detailed explanation of implementing {topic} in system design, "
            "including examples, best practices, and common pitfalls."
        ),
    ),
    CategoryRule(
        name="Coding Challenges",
        target=10,
        keywords=(),
        topics=(
            "Array Manipulation", "String Processing", "Linked Lists", "Trees and Graphs",
            "Dynamic Programming", "Sorting Algorithms", "Searching Algorithms",
            "Hash Tables", "Stacks and Queues", "Recursion", "Bit Manipulation",
            "Design Patterns", "Concurrency", "Memory Management", "Algorithm Optimization",
        ),
        question_templates=(
            "Implement a solution for a {topic} problem.",
            "Walk through an optimized {topic} solution and its complexity.",
        ),
        answer_template=(
            "This is a detailed solution for a {topic} problem, including code examples, "
            "time and space complexity analysis, and optimization techniques."
        ),
    ),
)


def split_skills(additional_skills: Optional[str]) -> List[str]:
    """
    Split a comma-separated skills string.

    Example:
        >>> split_skills(" Kafka, ,Redis ")
        ['Kafka', 'Redis']
    """
    if not additional_skills:
        return []
    return [part.strip() for part in additional_skills.split(",") if part.strip()]


def load_question_bank(path: Path = DEFAULT_BANK_PATH) -> Dict[str, List[InterviewQuestion]]:
    """
    Load curated questions grouped by category.

    Raises:
        CatalogError: If the file is missing, not JSON, or malformed
    """
    if not path.exists():
        raise CatalogError(f"Question bank not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Invalid JSON in {path}: {e}") from e

    bank: Dict[str, List[InterviewQuestion]] = {}
    try:
        for record in data["questions"]:
            question = InterviewQuestion.with_detected_code(
                category=record["category"],
                subcategory=record.get("subcategory"),
                question=record["question"],
                answer=record["answer"],
                difficulty=int(record.get("difficulty", 3)),
            )
            bank.setdefault(question.category, []).append(question)
    except (KeyError, TypeError, ValueError) as e:
        raise CatalogError(f"Malformed question record in {path}: {e}") from e

    logger.debug(f"Loaded {sum(len(v) for v in bank.values())} curated questions from {path.name}")
    return bank


class QuestionCatalog:
    """
    Offline question selection.

    Args:
        bank: Curated questions by category (defaults to the bundled bank)
        seed: Seed for the sampling RNG; None for nondeterministic output
        rules: Category rules in display order

    Example:
        >>> catalog = QuestionCatalog(seed=42)
        >>> questions = catalog.questions_for(job)
        >>> list(questions)[:2]
        ['Core Java', 'Spring & Spring Boot']
    """

    def __init__(
        self,
        bank: Optional[Dict[str, List[InterviewQuestion]]] = None,
        seed: Optional[int] = None,
        rules: Sequence[CategoryRule] = CATEGORY_RULES,
    ) -> None:
        self._bank = bank if bank is not None else load_question_bank()
        self._rng = random.Random(seed)
        self._rules = tuple(rules)

    def select_categories(self, skills: Iterable[str]) -> List[CategoryRule]:
        """Rules whose keywords match any skill, in display order."""
        lowered = [skill.lower() for skill in skills]
        return [rule for rule in self._rules if rule.matches(lowered)]

    def questions_for(
        self,
        job: JobDescription,
        additional_skills: Optional[str] = None,
    ) -> QuestionMap:
        """
        Select questions for a job description.

        Categories come from skills, technologies and the additional skills.
        When the total falls below MINIMUM_TOTAL, templated questions are
        spread across the selected categories.
        """
        skills = list(job.all_skills) + split_skills(additional_skills)
        rules = self.select_categories(skills)

        result: QuestionMap = {}
        for rule in rules:
            result[rule.name] = self._draw(rule, rule.target)
            logger.debug(f"Selected {len(result[rule.name])} questions for {rule.name!r}")

        total = total_question_count(result)
        if total < MINIMUM_TOTAL:
            logger.info(f"Only have {total} questions, generating {MINIMUM_TOTAL - total} more")
            self._top_up(result, rules, MINIMUM_TOTAL - total)

        logger.info(
            f"Catalog selected {total_question_count(result)} questions "
            f"across {len(result)} categories"
        )
        return result

    def _draw(self, rule: CategoryRule, count: int) -> List[InterviewQuestion]:
        curated = list(self._bank.get(rule.name, []))
        if len(curated) >= count:
            return self._rng.sample(curated, count)
        return curated + self._templated(rule, count - len(curated), curated)

    def _top_up(self, result: QuestionMap, rules: Sequence[CategoryRule], missing: int) -> None:
        """Distribute `missing` templated questions across the categories."""
        per_category, remainder = divmod(missing, len(rules))
        for index, rule in enumerate(rules):
            count = per_category + (1 if index < remainder else 0)
            if count:
                current = result[rule.name]
                current.extend(self._templated(rule, count, current))

    @staticmethod
    def _templated(
        rule: CategoryRule,
        count: int,
        existing: Sequence[InterviewQuestion],
    ) -> List[InterviewQuestion]:
        """Up to `count` templated questions not already in `existing` (case-insensitive)."""
        seen = {q.question.lower() for q in existing if q.question}
        fresh = []
        for question in rule.templated():
            if len(fresh) >= count:
                break
            key = question.question.lower()
            if key in seen:
                continue
            seen.add(key)
            fresh.append(question)

        if len(fresh) < count:
            logger.warning(f"Templates for {rule.name!r} exhausted: {len(fresh)} of {count}")
        return fresh
