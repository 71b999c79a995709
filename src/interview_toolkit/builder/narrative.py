"""
Module: builder.narrative

Purpose:
    Narrative text for the two prose sections of a guide. Both are
    markdown-like blobs ("# ", "## ", "### ", "- " prefixes) that the composer
    turns into one block per line.

Key Functions:
    - introduction_text(): About, key skills, technologies, how to use
    - final_tips_text(): Preparation tips, resources, day-before checklist

Dependencies:
    - interview_toolkit.core.models: JobDescription

Used By:
    - builder.controller: Main build controller
"""

from __future__ import annotations

from typing import List

from interview_toolkit.core.models import JobDescription

DEFAULT_SKILLS = (
    "Java programming",
    "Object-oriented design",
    "Problem-solving skills",
)

DEFAULT_TECHNOLOGIES = (
    "Java 8/11/17",
    "Spring Framework",
    "Databases (SQL/NoSQL)",
)


def _bullets(items) -> List[str]:
    return [f"- {item}" for item in items]


def introduction_text(job: JobDescription) -> str:
    """
    Build the introduction for a job description.

    Skills and technologies fall back to generic defaults when the job
    description lists none. The organization is mentioned only when known.
    """
    position = f"{job.title} position"
    if job.has_known_company:
        position += f" at {job.company}"

    lines = [
        f"# Technical Interview Guide for {job.title}",
        "",
        "## About This Guide",
        "",
        (
            f"This comprehensive technical interview guide has been tailored specifically "
            f"for the {position}. It contains over 100 pages of interview questions and "
            f"detailed answers covering all the technical areas relevant to this role."
        ),
        "",
        "## Key Skills Required",
        "",
        *_bullets(job.skills or DEFAULT_SKILLS),
        "",
        "## Technologies",
        "",
        *_bullets(job.technologies or DEFAULT_TECHNOLOGIES),
        "",
        "## How to Use This Guide",
        "",
        (
            "This guide is organized into sections covering different technical areas. "
            "Each section contains questions of varying difficulty levels, from basic to advanced. "
            "Review the questions and answers thoroughly, and practice explaining the concepts "
            "in your own words. For coding questions, try to solve them yourself before "
            "looking at the solutions."
        ),
        "",
        "Good luck with your interview preparation!",
    ]
    return "\n".join(lines) + "\n"


def final_tips_text() -> str:
    """Static closing section: tips, recommended resources, day-before list."""
    lines = [
        "# Final Tips & Resources",
        "",
        "## Interview Preparation Tips",
        "",
        "1. Review Core Concepts: Ensure you have a solid understanding of core Java concepts, "
        "especially those highlighted in this guide.",
        "",
        "2. Practice Coding: Regularly solve coding problems on platforms like LeetCode, "
        "HackerRank, or CodeSignal.",
        "",
        "3. Mock Interviews: Conduct mock interviews with peers or use services like Pramp "
        "or interviewing.io.",
        "",
        "4. System Design Practice: Draw out system architectures and practice explaining "
        "your design decisions.",
        "",
        "5. Behavioral Preparation: Prepare stories about your past experiences using the "
        "STAR method (Situation, Task, Action, Result).",
        "",
        "## Recommended Resources",
        "",
        "### Books",
        '- "Effective Java" by Joshua Bloch',
        '- "Clean Code" by Robert C. Martin',
        '- "Java Concurrency in Practice" by Brian Goetz',
        '- "Spring in Action" by Craig Walls',
        '- "Designing Data-Intensive Applications" by Martin Kleppmann',
        "",
        "### Online Courses",
        '- Coursera: "Java Programming and Software Engineering Fundamentals"',
        '- Udemy: "Spring & Hibernate for Beginners"',
        '- Pluralsight: "Java Fundamentals"',
        "- Baeldung: Various Spring tutorials",
        "",
        "### Websites",
        "- Baeldung (https://www.baeldung.com/)",
        "- DZone (https://dzone.com/)",
        "- Stack Overflow (https://stackoverflow.com/)",
        "- GitHub (explore open-source Java projects)",
        "- Spring.io (https://spring.io/guides)",
        "",
        "## Day Before the Interview",
        "",
        "1. Review this guide one more time, focusing on areas you're less confident about.",
        "2. Get a good night's sleep.",
        "3. Prepare your environment for a virtual interview or plan your route for an "
        "in-person interview.",
        "4. Have questions ready to ask the interviewer about the role, team, and company.",
        "",
        "Remember, interviews are also an opportunity for you to evaluate if the company "
        "and role are a good fit for you. Good luck!",
    ]
    return "\n".join(lines)
