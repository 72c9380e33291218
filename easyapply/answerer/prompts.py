"""Prompt templates for the Claude answerer."""

SYSTEM_PROMPT = """You are filling out a job application on behalf of the candidate whose
resume is given below. Answer in the first person, truthfully, using only what
the resume supports. Keep answers short unless the question asks for detail.

## CANDIDATE RESUME
{resume}

## CURRENT JOB
{job_context}

## RULES
1. Reply with the answer only: no preamble, no quotes, no explanation
2. For choice questions, reply with the EXACT text of one option
3. For numeric questions, reply with a single whole number
4. Write in {language}"""


TEXTUAL_PROMPT = """Question: {question}

Answer as the candidate."""


OPTIONS_PROMPT = """Question: {question}

Options:
{options}

Reply with the exact text of the best option."""


NUMERIC_PROMPT = """Question: {question}

Reply with one whole number. If the resume does not say, reply {default}."""


RETRY_PROMPT = """Your previous answer to this application question was rejected.

Question: {question}
Previous answer: {previous_answer}
Error shown by the form: {error_message}
{extra}
Give a corrected answer that satisfies the error. Reply with the answer only."""


KEYWORDS_PROMPT = """Extract the keywords a recruiter would screen for in this job description.

## JOB DESCRIPTION
{job_description}

Return ONLY JSON: {{"technical_skills": [...], "soft_skills": [...], "domain_terms": [...], "action_verbs": [...]}}"""


TAILOR_PROMPT = """Rewrite this resume YAML so it targets the job below.

## TARGET KEYWORDS
{keywords}

## JOB DESCRIPTION
{job_description}

## BASE RESUME YAML
{resume_yaml}

## RULES
1. Keep the same YAML structure and every top-level key
2. Never invent employers, dates, degrees or skills the candidate lacks
3. Reorder and reword highlights so matching experience comes first
4. Write in {language}

Return ONLY the YAML document."""


def build_options_prompt(question: str, options: list[str]) -> str:
    """Build the user prompt for a multiple-choice question."""
    return OPTIONS_PROMPT.format(question=question, options="\n".join(options))


def build_retry_prompt(
    question: str,
    previous_answer: str,
    error_message: str,
    options: list[str] | None = None,
) -> str:
    """Build a retry prompt, listing options when the field has them."""
    extra = ""
    if options:
        extra = "Available options:\n" + "\n".join(options) + "\n"
    return RETRY_PROMPT.format(
        question=question,
        previous_answer=previous_answer,
        error_message=error_message,
        extra=extra,
    )


def format_keywords(keywords: dict) -> str:
    """Render extracted keywords as labelled comma-separated lines."""
    lines = []
    for key in ("technical_skills", "soft_skills", "domain_terms", "action_verbs"):
        values = keywords.get(key) or []
        lines.append(f"{key.replace('_', ' ').title()}: {', '.join(map(str, values))}")
    return "\n".join(lines)


def build_tailor_prompt(
    job_description: str, resume_yaml: str, keywords: dict, language: str
) -> str:
    """Build the resume rewrite prompt."""
    return TAILOR_PROMPT.format(
        keywords=format_keywords(keywords),
        job_description=job_description,
        resume_yaml=resume_yaml,
        language=language,
    )


def build_scores_json(keywords: dict, resume_yaml: str) -> dict:
    """Keyword coverage of the resume, stored beside the tailored artifact."""
    lowered = resume_yaml.lower()
    scores: dict[str, dict] = {}
    for category, values in keywords.items():
        if not isinstance(values, list):
            continue
        matched = [v for v in values if str(v).lower() in lowered]
        scores[category] = {
            "matched": matched,
            "total": len(values),
        }
    return scores
