from __future__ import annotations

import json

from draftrel.core.config import InstructionsConfig
from draftrel.release.contracts import ReleaseDraft

NEXT_STEPS_HEADER = "Here's what you should do next:"


def render_entries_json(draft: ReleaseDraft) -> str:
    """Pretty-printed `{next_version: [entries]}` mapping."""
    return json.dumps(draft.as_mapping(), indent=2, ensure_ascii=False)


def render_instructions(
    draft: ReleaseDraft,
    *,
    changelog_path: str,
    instructions: InstructionsConfig = InstructionsConfig(),
) -> list[str]:
    """Numbered steps for the operator, one string per line."""
    version = str(draft.next_version)

    if draft.no_changes:
        changelog_step = (
            f"No changes were found since '{draft.previous.name}', so no changelog is "
            f"included. Add an empty entry for '{version}' to the 'releases' element "
            f"in {changelog_path} if the release should still be listed"
        )
    else:
        changelog_step = (
            f"Concatenate this to the beginning of the 'releases' element in "
            f"{changelog_path} as a starting point:\n{render_entries_json(draft)}\n"
        )

    revise_step = "Revise the release notes"
    if instructions.release_notes_guide:
        revise_step += f" according to {instructions.release_notes_guide}"

    release_step = "Perform the release"
    if instructions.releasing_guide:
        release_step += f", following {instructions.releasing_guide}"

    steps = [
        f"Update the {instructions.version_file} 'version' to '{version}' "
        "(make sure this aligns with semver format of 'major.minor.patch')",
        changelog_step,
        revise_step,
        "Commit the changes (on the development branch or a new branch) and push them",
        release_step,
    ]

    lines: list[str] = []
    if not draft.no_changes:
        lines.extend([NEXT_STEPS_HEADER, ""])
    for index, step in enumerate(steps, start=1):
        lines.append(f"{index}. {step}")
    return lines
