"""Rendering of the generated assistant document (CLAUDE.md).

Every generated section sits between a pair of marker lines::

    [//]: # (franken-ai:<name>:start)
    ...
    [//]: # (franken-ai:<name>:end)

so that later runs can regenerate one section in place and leave the
user's own text around it untouched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple

from frankenai.core.models import StackCommands
from frankenai.guidelines.manager import GuidelineEntry, GuidelineManager, ResolvedGuidelines

if TYPE_CHECKING:
    from frankenai.detection.detector import StackReport

DOCUMENT_TITLE = "# FrankenAI Configuration"
SECTION_NAMES: Tuple[str, ...] = ("stack", "commands", "workflow", "guidelines")

COMMAND_HEADINGS = [
    ("dev", "Development"),
    ("build", "Build"),
    ("test", "Testing"),
    ("lint", "Linting"),
    ("install", "Package Management"),
]

WORKFLOW_BODY = """## FrankenAI Workflow

### Discovery Phase (Gemini CLI)
Use for large-scale codebase analysis:

```bash
# Architecture overview
gemini -p "@src/ @app/ What's the overall architecture?"

# Feature verification
gemini -p "@src/ Is user authentication implemented?"

# Pattern detection
gemini -p "@./ Show me all async functions with file locations"
```

### Implementation Phase (Claude Code)
Use for precise development:

- **File Editing**: Read/Write/Edit tools for code changes
- **Framework Tools**: Use framework-specific commands
- **Testing**: Run and debug tests
- **Real-time Problem Solving**: Debug and validate implementations"""


def start_marker(name: str) -> str:
    return f"[//]: # (franken-ai:{name}:start)"


def end_marker(name: str) -> str:
    return f"[//]: # (franken-ai:{name}:end)"


def wrap_section(name: str, body: str) -> str:
    """Surround ``body`` with the section's marker lines."""
    return f"{start_marker(name)}\n{body.strip()}\n{end_marker(name)}"


def _section_pattern(name: str) -> "re.Pattern[str]":
    return re.compile(
        re.escape(start_marker(name)) + r"\n?(.*?)\n?" + re.escape(end_marker(name)),
        re.DOTALL,
    )


def extract_sections(markdown: str) -> Dict[str, str]:
    """Return the inner text of every marked section, keyed by name."""
    sections: Dict[str, str] = {}
    for match in re.finditer(
        r"\[//\]: # \(franken-ai:([\w-]+):start\)\n?(.*?)\n?\[//\]: # \(franken-ai:\1:end\)",
        markdown,
        re.DOTALL,
    ):
        sections.setdefault(match.group(1), match.group(2).strip())
    return sections


def replace_section(markdown: str, name: str, body: str) -> str:
    """Replace the marked section ``name`` with ``body``.

    When the document has no such section, the wrapped section is
    appended at the end.
    """
    wrapped = wrap_section(name, body)
    pattern = _section_pattern(name)
    if pattern.search(markdown):
        return pattern.sub(lambda _: wrapped, markdown, count=1)
    return f"{markdown.rstrip()}\n\n{wrapped}\n"


def merge_document(existing: str, generated: str) -> str:
    """Refresh every generated section inside an existing document."""
    merged = existing
    for name, body in extract_sections(generated).items():
        merged = replace_section(merged, name, body)
    return merged


@dataclass
class RenderedDocument:
    """Rendered Markdown plus the guideline keys that had no body."""

    content: str
    missing: List[str] = field(default_factory=list)
    guidelines: List[GuidelineEntry] = field(default_factory=list)


def render_stack_section(report: "StackReport") -> str:
    stack = report.stack
    names = report.display_names
    frameworks = [names.get(f, f) for f in stack.frameworks]

    lines = [f"## Detected Stack: {', '.join(frameworks) or 'Generic'}", "", "### Project Information"]
    lines.append(f"- **Runtime**: {stack.runtime}")
    if stack.languages:
        lines.append(f"- **Languages**: {', '.join(names.get(x, x) for x in stack.languages)}")
    if frameworks:
        lines.append(f"- **Frameworks**: {', '.join(frameworks)}")
    if stack.libraries:
        lines.append(f"- **Libraries & Tools**: {', '.join(names.get(x, x) for x in stack.libraries)}")
    if stack.package_managers:
        lines.append(f"- **Package Managers**: {', '.join(stack.package_managers)}")
    for module_id, version in report.versions.items():
        if version:
            lines.append(f"- **{names.get(module_id, module_id)} Version**: {version}")
    return "\n".join(lines)


def render_commands_section(commands: StackCommands) -> str:
    lines = ["## Commands"]
    if commands.is_empty():
        lines += ["", "No commands detected for this stack."]
        return "\n".join(lines)

    for category, heading in COMMAND_HEADINGS:
        entries = getattr(commands, category)
        if not entries:
            continue
        lines += ["", f"### {heading}"]
        lines += [f"- `{command}`" for command in entries]
    return "\n".join(lines)


def render_guidelines_section(resolved: ResolvedGuidelines) -> str:
    if not resolved.bodies:
        return "## Guidelines\n\nNo guidelines available for the detected stack."
    return "\n\n".join(body.strip() for _, body in resolved.bodies)


def build_sections(
    report: "StackReport",
    guideline_manager: Optional[GuidelineManager] = None,
    strict: bool = False,
) -> Tuple[Dict[str, str], ResolvedGuidelines]:
    """Render the inner body of every section.

    Raises:
        GuidelineNotFoundError: In strict mode, when a guideline body is missing.
    """
    manager = guideline_manager or GuidelineManager()
    resolved = manager.resolve(report.guidelines, strict=strict)
    sections = {
        "stack": render_stack_section(report),
        "commands": render_commands_section(report.commands),
        "workflow": WORKFLOW_BODY,
        "guidelines": render_guidelines_section(resolved),
    }
    return sections, resolved


def render_document(
    report: "StackReport",
    guideline_manager: Optional[GuidelineManager] = None,
    strict: bool = False,
    sections: Iterable[str] = SECTION_NAMES,
) -> RenderedDocument:
    """Render the complete document for a detection report.

    Args:
        report: Output of ``StackDetector.detect``.
        guideline_manager: Manager used to resolve guideline bodies.
        strict: Raise when a guideline body is missing.
        sections: Section names to include, in output order.

    Returns:
        RenderedDocument with the Markdown content.
    """
    bodies, resolved = build_sections(report, guideline_manager, strict=strict)
    parts = [DOCUMENT_TITLE]
    parts += [wrap_section(name, bodies[name]) for name in sections]
    return RenderedDocument(
        content="\n\n".join(parts) + "\n",
        missing=resolved.missing,
        guidelines=list(report.guidelines),
    )
