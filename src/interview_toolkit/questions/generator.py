"""
Module: questions.generator

Purpose:
    Generate interview questions with a local Ollama model over HTTP.
    One task per category runs on a thread pool; each task asks the model
    for questions per subcategory and parses the reply as JSON, falling
    back to "Q:"/"A:" text and finally to a placeholder question.

Key Functions:
    - parse_generated_questions(): Model reply -> questions

Key Classes:
    - GeneratorConfig: Endpoint, model, counts, timeouts
    - OllamaQuestionGenerator: Category fan-out and HTTP calls
    - GenerationError: Exception for failed requests

Dependencies:
    - httpx: HTTP client
    - concurrent.futures, threading (std): Parallel category generation, cancellation

Used By:
    - questions.supply: Preferred question source
"""

from __future__ import annotations

import json
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import httpx

from interview_toolkit.core.models import InterviewQuestion, JobDescription, QuestionMap

logger = logging.getLogger(__name__)

PLACEHOLDER_QUESTION = "Explain the key concepts of {subcategory} in {category}"
PLACEHOLDER_ANSWER = (
    "This is a placeholder answer. The AI-generated content could not be retrieved."
)

# Category -> (trigger keywords, subcategories); empty keywords means always
CATEGORY_SUBCATEGORIES: Dict[str, tuple[tuple[str, ...], tuple[str, ...]]] = {
    "Core Java": (
        (),
        ("OOP", "Collections", "Multithreading", "Streams", "Exception Handling", "JVM"),
    ),
    "Spring & Spring Boot": (
        ("spring", "spring boot", "spring framework"),
        ("Spring Core", "Spring Boot", "Spring Security", "Spring Data", "Spring Cloud"),
    ),
    "REST API & Microservices": (
        ("rest", "api", "microservices", "web services"),
        ("REST Principles", "Microservices", "API Security", "API Gateway", "Service Discovery"),
    ),
    "Database & ORM": (
        ("sql", "database", "mysql", "postgresql", "oracle", "mongodb", "nosql", "hibernate", "jpa"),
        ("SQL", "NoSQL", "Hibernate", "JPA", "Transaction Management", "Database Design"),
    ),
    "Cloud & Containerization": (
        ("cloud", "aws", "azure", "gcp", "docker", "kubernetes", "container", "devops", "ci/cd"),
        ("Docker", "Kubernetes", "AWS/Azure/GCP", "CI/CD", "Infrastructure as Code"),
    ),
    "System Design & Architecture": (
        (),
        ("Scalability", "Caching", "Load Balancing", "Messaging", "Event-Driven Architecture"),
    ),
    "Coding Challenges": (
        (),
        ("Algorithms", "Data Structures", "Problem Solving", "Design Patterns"),
    ),
}


class GenerationError(Exception):
    """Error calling the model endpoint or reading its reply."""
    pass


@dataclass(frozen=True)
class GeneratorConfig:
    """
    Configuration for networked question generation.

    Attributes:
        base_url: Ollama server root
        model: Model tag passed to /api/generate
        questions_per_category: Questions requested per category, split
            evenly across its subcategories
        max_workers: Concurrent category tasks
        request_timeout: Seconds per HTTP request
        overall_timeout: Seconds to wait for all categories together
        minimum_yield: Fewest questions accepted before falling back
    """
    base_url: str = "http://localhost:11500"
    model: str = "llama3.1:latest"
    questions_per_category: int = 20
    max_workers: int = 5
    request_timeout: float = 120.0
    overall_timeout: float = 900.0
    minimum_yield: int = 100

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not self.base_url:
            raise ValueError("base_url must be non-empty")
        if not self.model:
            raise ValueError("model must be non-empty")
        if self.questions_per_category < 1:
            raise ValueError(f"questions_per_category must be >= 1, got {self.questions_per_category}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.request_timeout <= 0 or self.overall_timeout <= 0:
            raise ValueError("timeouts must be positive")
        if self.minimum_yield < 0:
            raise ValueError(f"minimum_yield must be >= 0, got {self.minimum_yield}")

    @property
    def generate_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/api/generate"


def _placeholder(category: str, subcategory: str) -> InterviewQuestion:
    return InterviewQuestion(
        category=category,
        subcategory=subcategory,
        question=PLACEHOLDER_QUESTION.format(subcategory=subcategory, category=category),
        answer=PLACEHOLDER_ANSWER,
    )


def _parse_json_block(text: str, category: str, subcategory: str) -> List[InterviewQuestion]:
    start, end = text.find("{"), text.rfind("}")
    if start == -1 or end <= start:
        return []
    try:
        data = json.loads(text[start:end + 1])
    except json.JSONDecodeError:
        logger.debug(f"Reply for {category}/{subcategory} is not valid JSON")
        return []

    items = data.get("questions") if isinstance(data, dict) else None
    if not isinstance(items, list):
        return []

    questions = []
    for item in items:
        if not isinstance(item, dict):
            continue
        question, answer = item.get("question"), item.get("answer")
        if isinstance(question, str) and isinstance(answer, str):
            questions.append(InterviewQuestion.with_detected_code(category, subcategory, question, answer))
    return questions


def _parse_labelled_text(text: str, category: str, subcategory: str) -> List[InterviewQuestion]:
    questions = []
    current: Optional[str] = None
    answer: List[str] = []

    def flush() -> None:
        body = "\n".join(answer).strip()
        if current is not None and body:
            questions.append(InterviewQuestion.with_detected_code(category, subcategory, current, body))

    for line in text.split("\n"):
        if line.startswith(("Q:", "Question:")):
            flush()
            current = line.split(":", 1)[1].strip()
            answer = []
        elif line.startswith(("A:", "Answer:")):
            answer.append(line.split(":", 1)[1].strip())
        elif current is not None:
            answer.append(line)
    flush()
    return questions


def parse_generated_questions(text: str, category: str, subcategory: str) -> List[InterviewQuestion]:
    """
    Parse a model reply into questions.

    Tries, in order: the outermost {...} block as {"questions": [...]},
    then "Q:"/"A:" labelled text, then a single placeholder question.
    Never returns an empty list.

    Example:
        >>> parse_generated_questions('{"questions": [{"question": "Q1", "answer": "A1"}]}', "Core Java", "OOP")
        [InterviewQuestion(category='Core Java', subcategory='OOP', question='Q1')]
    """
    questions = _parse_json_block(text, category, subcategory)
    if not questions:
        questions = _parse_labelled_text(text, category, subcategory)
    if not questions:
        logger.warning(f"Could not parse reply for {category}/{subcategory}, using placeholder")
        questions = [_placeholder(category, subcategory)]
    return questions


class OllamaQuestionGenerator:
    """
    Question generator backed by an Ollama server.

    Args:
        config: Generator configuration
        client: Optional pre-built httpx.Client (closed by the caller)

    Example:
        >>> with OllamaQuestionGenerator(GeneratorConfig()) as generator:
        ...     questions = generator.generate(job)
    """

    def __init__(self, config: GeneratorConfig, client: Optional[httpx.Client] = None) -> None:
        self.config = config
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=config.request_timeout)
        self._cancelled = threading.Event()

    def __enter__(self) -> OllamaQuestionGenerator:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def cancel(self) -> None:
        """Stop running category tasks before their next subcategory request."""
        self._cancelled.set()

    # ─────────────────────────────────────────────────────────────────────
    # Categories and prompts
    # ─────────────────────────────────────────────────────────────────────

    @staticmethod
    def categories_for(job: JobDescription) -> List[str]:
        """Categories in display order, selected from the job's technologies."""
        technologies = [tech.lower() for tech in job.technologies]
        return [
            category
            for category, (keywords, _) in CATEGORY_SUBCATEGORIES.items()
            if not keywords or any(k in tech for tech in technologies for k in keywords)
        ]

    @staticmethod
    def subcategories_for(category: str) -> Sequence[str]:
        entry = CATEGORY_SUBCATEGORIES.get(category)
        return entry[1] if entry else ("General",)

    @staticmethod
    def build_prompt(category: str, subcategory: str, count: int, job: JobDescription) -> str:
        """Prompt asking for `count` questions as {"questions": [{question, answer}]}."""
        return (
            f"Generate {count} detailed technical interview questions and answers about "
            f"{subcategory} in {category} for a {job.title} position.\n\n"
            f"Job skills include: {', '.join(job.skills)}\n"
            f"Technologies include: {', '.join(job.technologies)}\n\n"
            "For each question, provide:\n"
            "1. A challenging, specific technical question that would be asked in an interview\n"
            "2. A comprehensive, detailed answer (at least 400 words) with examples, "
            "best practices, and technical details\n\n"
            "Format your response as JSON with this structure:\n"
            "{\n"
            '  "questions": [\n'
            "    {\n"
            '      "question": "Question text here",\n'
            '      "answer": "Detailed answer here"\n'
            "    },\n"
            "    ...\n"
            "  ]\n"
            "}\n"
        )

    # ─────────────────────────────────────────────────────────────────────
    # HTTP
    # ─────────────────────────────────────────────────────────────────────

    def request(self, prompt: str) -> str:
        """
        POST a non-streaming generate request and return the reply text.

        Raises:
            GenerationError: Transport failure, HTTP error status, or a
                body without a "response" string
        """
        payload = {"model": self.config.model, "prompt": prompt, "stream": False}
        try:
            response = self._client.post(
                self.config.generate_url,
                json=payload,
                timeout=self.config.request_timeout,
            )
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as e:
            raise GenerationError(f"Request to {self.config.generate_url} failed: {e}") from e
        except ValueError as e:
            raise GenerationError(f"Invalid JSON from {self.config.generate_url}: {e}") from e

        text = body.get("response") if isinstance(body, dict) else None
        if not isinstance(text, str):
            raise GenerationError("Reply has no 'response' field")
        return text

    # ─────────────────────────────────────────────────────────────────────
    # Generation
    # ─────────────────────────────────────────────────────────────────────

    def generate_category(self, category: str, job: JobDescription) -> List[InterviewQuestion]:
        """
        Generate questions for one category, subcategory by subcategory.

        A failed subcategory request contributes one placeholder question.
        Stops early, keeping what it has, once cancel() has been called.
        """
        subcategories = self.subcategories_for(category)
        per_subcategory = max(1, self.config.questions_per_category // len(subcategories))

        questions: List[InterviewQuestion] = []
        for subcategory in subcategories:
            if self._cancelled.is_set():
                logger.debug(f"Generation for {category!r} cancelled before {subcategory!r}")
                break
            prompt = self.build_prompt(category, subcategory, per_subcategory, job)
            try:
                reply = self.request(prompt)
            except GenerationError as e:
                logger.warning(f"Generation failed for {category} - {subcategory}: {e}")
                questions.append(_placeholder(category, subcategory))
                continue
            questions.extend(parse_generated_questions(reply, category, subcategory))

        logger.debug(f"Generated {len(questions)} questions for {category!r}")
        return questions

    def generate(self, job: JobDescription) -> QuestionMap:
        """
        Generate questions for every category of a job description.

        Categories run concurrently; the call returns after all finish or the
        overall timeout passes. Categories that raised or did not finish in
        time are left out. The result keeps category order.

        On timeout the remaining tasks are cancelled: queued ones never start
        and running ones stop before their next request. A request already in
        flight still runs until request_timeout, and the interpreter waits
        for it on exit.
        """
        self._cancelled.clear()
        categories = self.categories_for(job)
        logger.info(f"Generating questions for {len(categories)} categories with {self.config.model}")

        pool = ThreadPoolExecutor(max_workers=self.config.max_workers)
        try:
            futures = {
                category: pool.submit(self.generate_category, category, job)
                for category in categories
            }
            _, not_done = wait(futures.values(), timeout=self.config.overall_timeout)
            if not_done:
                self.cancel()
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

        result: QuestionMap = {}
        for category, future in futures.items():
            if future in not_done:
                logger.warning(f"Generation for {category!r} timed out")
                continue
            error = future.exception()
            if error is not None:
                logger.warning(f"Generation for {category!r} failed: {error}")
                continue
            result[category] = future.result()

        return result
