"""Parsers turning free-text model output into structured results."""

import re

from edu_echo.domain.models import ChunkSummary, Flashcard, QuizQuestion
from edu_echo.exceptions import GenerationError

_SUMMARY_LABEL = re.compile(r"^\s*Summary:\s*", re.IGNORECASE | re.MULTILINE)
_TOPIC_PREFIX = re.compile(
    r"^(Topic Title:|Primary Topic:|Topic Heading:|Topic:)\s*", re.IGNORECASE
)
_KEY_POINTS_LABEL = re.compile(
    r"^(Key Points|Important Points|Main Points):?$", re.IGNORECASE
)
_TITLE_LABEL = "title:"
_EXPLANATION_LABEL = "explanation:"
_BULLETS = ("-", "*", "•")
_TERM_LABEL = "term:"
_DEFINITION_LABEL = "definition:"

_QUIZ_PATTERN = re.compile(
    r"Question:\s*(.+?)\s+A[.)]\s*(.+?)\s+B[.)]\s*(.+?)\s+"
    r"C[.)]\s*(.+?)\s+D[.)]\s*(.+?)\s*"
    r"(?:Correct Answer|Answer):\s*([ABCD])\b"
)


def parse_chunk_summary(text: str) -> ChunkSummary:
    """
    Parses a chunk summary reply into topic, points and summary.

    The reply is expected to hold a topic title, dash-prefixed
    'Title: Explanation' lines and a trailing 'Summary:' section. Markdown
    bold markers are ignored, everything after the first 'Summary:' label is
    the summary, and the first unlabelled lines become the topic.

    Raises:
        GenerationError: If the reply is empty, has no topic, or has neither
            points nor a summary.
    """
    cleaned = text.replace("**", "").replace("\r\n", "\n").strip()
    if not cleaned:
        raise GenerationError("Generation backend returned an empty response")

    head, summary = _split_summary(cleaned)
    topic = ""
    points: list[str] = []

    for section in re.split(r"\n\s*\n", head):
        lines = [
            line.strip()
            for line in section.split("\n")
            if line.strip() and not _KEY_POINTS_LABEL.match(line.strip())
        ]
        heading: list[str] = []
        while lines and not _is_point_line(lines[0]):
            heading.append(lines.pop(0))
        if heading and not topic:
            topic = _TOPIC_PREFIX.sub("", " ".join(heading)).strip()
        _collect_points(lines, points)

    if not topic:
        raise GenerationError(f"Could not find a topic in response: {cleaned[:200]!r}")
    if not points and not summary:
        raise GenerationError(
            f"Could not find key points or a summary in response: {cleaned[:200]!r}"
        )
    return ChunkSummary(topic=topic, points=points, summary=summary)


def parse_quiz_question(text: str) -> QuizQuestion:
    """
    Parses a multiple-choice question with options A-D and a marked answer.

    Raises:
        GenerationError: If the reply does not match the expected layout.
    """
    cleaned = re.sub(r"</?[^>]+>|\*\*|\*|_", "", text).strip()
    uniform = re.sub(r"\s+", " ", cleaned)
    match = _QUIZ_PATTERN.search(uniform)
    if not match:
        raise GenerationError(f"Could not parse quiz question from: {uniform[:200]!r}")

    question, *options, letter = match.groups()
    options = [option.strip() for option in options]
    correct = options["ABCD".index(letter)]
    return QuizQuestion(
        question=question.strip(), options=options, correct_answer=correct
    )


def parse_flashcards(text: str) -> list[Flashcard]:
    """
    Parses blank-line separated 'Term:' / 'Definition:' entries.

    Entries missing either label are skipped. Bullets and markdown bold
    markers in front of the labels are ignored.

    Raises:
        GenerationError: If no entry holds both a term and a definition.
    """
    cleaned = text.replace("**", "").replace("\r\n", "\n").strip()
    flashcards = []
    for entry in re.split(r"\n\s*\n", cleaned):
        term = definition = ""
        for line in entry.split("\n"):
            line = line.strip().lstrip("-*• ").strip()
            lowered = line.lower()
            if lowered.startswith(_TERM_LABEL):
                term = line[len(_TERM_LABEL) :].strip()
            elif lowered.startswith(_DEFINITION_LABEL):
                definition = line[len(_DEFINITION_LABEL) :].strip()
        if term and definition:
            flashcards.append(Flashcard(term=term, definition=definition))

    if not flashcards:
        raise GenerationError(f"Could not parse flashcards from: {cleaned[:200]!r}")
    return flashcards


def _split_summary(text: str) -> tuple[str, str]:
    match = _SUMMARY_LABEL.search(text)
    if not match:
        return text, ""
    return text[: match.start()], text[match.end() :].strip()


def _is_point_line(line: str) -> bool:
    return line.startswith(_BULLETS) or line.lower().startswith(
        (_TITLE_LABEL, _EXPLANATION_LABEL)
    )


def _collect_points(lines: list[str], points: list[str]) -> None:
    for line in lines:
        bulleted = line.startswith(_BULLETS)
        content = line.lstrip("-*• ").strip() if bulleted else line
        lowered = content.lower()
        if lowered.startswith(_TITLE_LABEL):
            points.append(content[len(_TITLE_LABEL) :].strip())
        elif lowered.startswith(_EXPLANATION_LABEL):
            explanation = content[len(_EXPLANATION_LABEL) :].strip()
            if points:
                points[-1] = f"{points[-1]}: {explanation}"
            else:
                points.append(explanation)
        elif bulleted:
            points.append(content)
        else:
            # wrapped continuation of the previous point
            points[-1] = f"{points[-1]} {line}"
