import json
from datetime import datetime
from typing import Optional

from ..datasources.base import RepoRef
from ..schemas import RepositoryMetadata

README_PROMPT_CHARS = 3000
FILES_PROMPT_MAX = 30

SYSTEM_PROMPT = (
    "You are an expert code reviewer and technical evaluator. You analyze GitHub repositories "
    "and provide detailed, fair scoring based on multiple criteria. Always respond with valid JSON only."
)

# Fixed rubric; identical for every challenge so scores stay comparable.
SCORING_RUBRIC = """**YOUR TASK:**
Carefully analyze if this repository matches the challenge requirements. Be STRICT and HONEST.

**CRITICAL EVALUATION RULES:**
1. If the repository is about a COMPLETELY DIFFERENT topic (e.g., Android app when challenge asks for web app), give VERY LOW scores (0-20 total)
2. If the repository name, description, or files don't match the challenge at all, score should be 0-10 total
3. If README doesn't mention the challenge topic, deduct major points
4. If the primary language doesn't match what's expected for the challenge, deduct points
5. Only give high scores (70+) if there's clear evidence the project addresses the challenge

**Scoring Criteria (Total: 100 points):**

1. **Functionality (0-30 points):**
   - Does it actually implement the challenge requirements?
   - Are the required features present?
   - Does the code/files match what's expected?
   - **Give 0-5 if completely unrelated to challenge**

2. **Code Quality (0-30 points):**
   - Is the code relevant to the challenge?
   - Good architecture for THIS specific challenge?
   - **Give 0-5 if wrong technology/language**

3. **Documentation (0-20 points):**
   - Does README explain the challenge solution?
   - Does it mention the challenge at all?
   - **Give 0 if README is about different project**

4. **Innovation (0-10 points):**
   - Creative solutions TO THIS CHALLENGE?
   - **Give 0 if not related to challenge**

5. **UI/UX (0-10 points):**
   - Relevant to challenge requirements?
   - **Give 0 if challenge requires UI but repo has none**

**EXAMPLES OF MISMATCHES (should score 0-15 total):**
- Challenge: "AI Meme Generator" → Repo: Android navigation app
- Challenge: "Todo App" → Repo: Machine learning model
- Challenge: "React Dashboard" → Repo: Python script
- Challenge: "E-commerce site" → Repo: Game development

**Response Format (JSON only):**
{
  "functionality": <number 0-30>,
  "codeQuality": <number 0-30>,
  "documentation": <number 0-20>,
  "innovation": <number 0-10>,
  "uiux": <number 0-10>,
  "feedback": "<HONEST feedback explaining why scores are low if repository doesn't match challenge, or praising if it does match>"
}

**BE BRUTALLY HONEST.** If the repository is completely unrelated to the challenge, say so clearly in feedback and give very low scores.

Respond with ONLY the JSON object, no additional text."""


def _format_date(value: Optional[str]) -> str:
    if not value:
        return "Unknown"
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return f"{dt.month}/{dt.day}/{dt.year}"


def _dependencies_block(metadata: RepositoryMetadata) -> str:
    if metadata.package_json is None:
        return "No package.json found"
    deps = metadata.package_json.get("dependencies") or {}
    return json.dumps(deps, indent=2, ensure_ascii=False)


def repository_section(ref: RepoRef, metadata: Optional[RepositoryMetadata]) -> str:
    if metadata is None:
        return (
            "\n**WARNING:** Could not fetch repository content. Repository may be private or deleted.\n"
            f"**Repository URL:** {ref.html_url}\n"
        )

    files = "\n".join(metadata.files[:FILES_PROMPT_MAX])
    return (
        "\n**ACTUAL REPOSITORY ANALYSIS:**\n\n"
        f"**Repository Name:** {metadata.name}\n"
        f"**Description:** {metadata.description or 'No description'}\n"
        f"**Primary Language:** {metadata.language}\n"
        f"**Topics/Tags:** {', '.join(metadata.topics) or 'None'}\n"
        f"**Stars:** {metadata.stars} | **Forks:** {metadata.forks}\n\n"
        f"**README Content (first {README_PROMPT_CHARS} chars):**\n"
        f"{metadata.readme[:README_PROMPT_CHARS] or 'No README found'}\n\n"
        "**File Structure (key files):**\n"
        f"{files or 'No files found'}\n\n"
        "**Dependencies (from package.json):**\n"
        f"{_dependencies_block(metadata)}\n\n"
        "**Repository Age:**\n"
        f"Created: {_format_date(metadata.created_at)}\n"
        f"Last Updated: {_format_date(metadata.updated_at)}\n"
    )


def compose_scoring_prompt(
    ref: RepoRef,
    challenge_title: str,
    challenge_description: str,
    metadata: Optional[RepositoryMetadata],
) -> str:
    return (
        "You are evaluating a GitHub repository submission for a coding challenge.\n\n"
        "**CHALLENGE REQUIREMENTS:**\n"
        f"**Title:** {challenge_title}\n"
        "**Description:**\n"
        f"{challenge_description}\n\n"
        f"{repository_section(ref, metadata)}\n\n"
        f"{SCORING_RUBRIC}"
    )
