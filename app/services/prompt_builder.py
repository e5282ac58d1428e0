"""Prompt templates for AI-assisted blog writing."""

from dataclasses import dataclass, field
from typing import List, Optional

TONE_DESCRIPTIONS = {
    "professional": "professional and formal",
    "casual": "casual and relaxed",
    "technical": "technical and detailed",
    "friendly": "friendly and warm",
}

LANGUAGE_INSTRUCTIONS = {
    "tr": "Write in Turkish. Follow Turkish grammar and spelling rules.",
    "en": "Write in English. Follow proper English grammar rules.",
}

LANGUAGE_NAMES = {
    "tr": "Turkish",
    "en": "English",
}

ALLOWED_HTML_TAGS = ("h2", "h3", "p", "ul", "ol", "li", "strong", "em")

OUTPUT_SCHEMA = """{
  "title": "Post title (max 60 characters)",
  "content": "<h2>Introduction</h2><p>Detailed introduction...</p><h2>Section 1</h2><p>Detailed content...</p>",
  "excerpt": "Short summary of 150-200 characters",
  "metaTitle": "SEO title (max 60 characters)",
  "metaDescription": "SEO description (max 160 characters)",
  "keywords": ["keyword1", "keyword2", "keyword3", "keyword4", "keyword5"],
  "suggestedTags": ["tag1", "tag2", "tag3", "tag4"]
}"""


@dataclass
class PostGenerationOptions:
    """Inputs for a full blog post draft. Validated by the caller."""
    topic: str
    keywords: List[str] = field(default_factory=list)
    tone: str = "professional"
    word_count: int = 1000
    language: str = "tr"
    category_name: Optional[str] = None


def build_post_prompt(options: PostGenerationOptions) -> str:
    """Build the instruction for a complete, SEO-ready blog post.

    Optional inputs that are empty (no keywords, no category) are left out.
    """
    tags = ", ".join(f"<{tag}>" for tag in ALLOWED_HTML_TAGS)
    header = [f"**TOPIC:** {options.topic}"]
    if options.category_name:
        header.append(f"**CATEGORY:** {options.category_name}")
    if options.keywords:
        header.append(f"**KEYWORDS:** {', '.join(options.keywords)}")
    header.append(f"**TONE:** {TONE_DESCRIPTIONS.get(options.tone, TONE_DESCRIPTIONS['professional'])}")
    header.append(f"**TARGET LENGTH:** {options.word_count} words (REQUIRED - you must reach this length)")
    header.append(f"**LANGUAGE:** {LANGUAGE_INSTRUCTIONS.get(options.language, LANGUAGE_INSTRUCTIONS['tr'])}")

    return f"""You are a professional blog writer. Write an engaging, SEO-friendly blog post that meets the criteria below.

{chr(10).join(header)}

**VERY IMPORTANT:**
- The content must be AT LEAST {options.word_count} words long.
- Write a COMPLETE blog post, not a short summary.
- Every section must be detailed (at least 3-4 paragraphs).

**STRUCTURE:**

1. **Introduction** (2-3 paragraphs)
   - Introduce the topic and why it matters
   - Hook the reader
   - Explain what the reader will learn

2. **Main sections** (3-5 sections, 3-4 paragraphs each)
   - Use an H2 heading for every main section
   - Add H3 headings for subsections
   - Include examples, lists and explanations

3. **Conclusion** (2 paragraphs)
   - Summarize the key points
   - Give the reader actionable advice

**HTML FORMAT:**
- Use only these tags: {tags}
- Every paragraph goes in a <p> tag
- Use <ul> or <ol> for lists

**SEO:**
- Place the keywords naturally
- Headings must be SEO-friendly

**OUTPUT FORMAT:**
Respond with ONLY a single JSON object matching this schema:

```json
{OUTPUT_SCHEMA}
```

RULES:
- Do not write anything before or after the JSON.
- Use valid JSON: no trailing commas, double quotes only.
- Escape newlines inside strings as \\n.
- "content" is the LONG HTML body of about {options.word_count} words.
- "excerpt" is a SHORT summary. Do not mix them up."""


def build_improve_prompt(content: str, instructions: str) -> str:
    return f"""Improve the following blog post.

**CURRENT CONTENT:**
{content}

**INSTRUCTIONS:**
{instructions}

Return only the improved content as HTML. Do not add explanations."""


def build_titles_prompt(topic: str, count: int = 5, language: str = "tr") -> str:
    language_name = LANGUAGE_NAMES.get(language, LANGUAGE_NAMES["tr"])
    return f"""Suggest {count} different, engaging blog post titles for the topic "{topic}".

Every title must:
- Be SEO-friendly
- Be 50-60 characters long
- Be catchy and clickable
- Be written in {language_name}

List only the titles, one per line, without numbering or explanations."""


def build_topics_prompt(category: str, count: int = 5, language: str = "tr") -> str:
    language_name = LANGUAGE_NAMES.get(language, LANGUAGE_NAMES["tr"])
    return f"""Suggest {count} different current and trending blog post topics for the category "{category}".

Every topic must:
- Be current and interesting
- Have strong SEO potential
- Be valuable for the target audience
- Be written in {language_name}

List only the topics, one per line, without explanations."""
