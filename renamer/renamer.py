import logging
import os
import re
from dataclasses import dataclass
from typing import Optional, Tuple

from rich.progress import Progress

from renamer.exceptions import PatternError, RootPathError
from renamer.template import ReplacementTemplate
from renamer.validator import check_replacement
from renamer.walker import walk_entries

log = logging.getLogger(__name__)

RENAMED = "renamed"
DRY_RUN = "dry-run"
SKIPPED = "skipped"
ERROR = "error"


@dataclass
class MatchCandidate:
    path: str
    matched: str
    groups: Tuple[Optional[str], ...]
    new_name: Optional[str] = None

    @property
    def name(self):
        return os.path.basename(self.path)

    @property
    def new_path(self):
        if self.new_name is None:
            return None
        return os.path.join(os.path.dirname(self.path), self.new_name)


@dataclass
class RenameResult:
    candidate: MatchCandidate
    status: str
    reason: Optional[str] = None
    error: Optional[OSError] = None


def compile_pattern(pattern):
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternError(pattern, e) from e


class RenamerModule:
    def __init__(self, pattern, replacement=None, recurse=False, dry_run=False):
        self.regex = pattern if isinstance(pattern, re.Pattern) else compile_pattern(pattern)
        self.template = ReplacementTemplate(replacement) if replacement is not None else None
        self.recurse = recurse
        self.dry_run = dry_run
        self.candidates = []

    def check_replacement(self):
        """Returns the ambiguity warnings for the replacement template, if any."""
        if self.template is None:
            return []
        return check_replacement(self.template.text)

    def scan(self, root_path):
        """Walks root_path and collects entries whose filename matches the regex."""
        if not os.path.isdir(root_path):
            raise RootPathError(root_path)

        self.candidates = []
        entries = list(walk_entries(root_path, recurse=self.recurse))

        with Progress(transient=True) as progress:
            task = progress.add_task("[cyan]Matching filenames...", total=len(entries))

            for entry in entries:
                progress.advance(task)
                match = self.regex.search(entry.name)
                if not match:
                    log.debug("No match for entry: %s", entry)
                    continue

                candidate = MatchCandidate(
                    path=str(entry),
                    matched=match.group(0),
                    groups=match.groups(),
                )
                if self.template is not None:
                    candidate.new_name = self.template.substitute(match)
                self.candidates.append(candidate)

        log.info("%d of %d entries matched", len(self.candidates), len(entries))
        return self.candidates

    def rename_map(self):
        """old path -> new path for every candidate with a computed name."""
        return {c.path: c.new_path for c in self.candidates if c.new_name is not None}

    def execute(self):
        """Executes renaming. A failing file is reported and the rest carry on."""
        results = []
        for candidate in self.candidates:
            if candidate.new_name is None:
                continue
            results.append(self._rename_one(candidate))
        return results

    def _rename_one(self, candidate):
        if not candidate.new_name:
            return RenameResult(candidate, SKIPPED, reason="replacement produced an empty name")

        if candidate.new_name == candidate.name:
            return RenameResult(candidate, SKIPPED, reason="name unchanged")

        if self.dry_run:
            return RenameResult(candidate, DRY_RUN)

        if os.path.lexists(candidate.new_path):
            return RenameResult(candidate, SKIPPED, reason="target exists")

        try:
            os.rename(candidate.path, candidate.new_path)
        except OSError as e:
            log.debug("Rename failed for %s", candidate.path, exc_info=True)
            return RenameResult(candidate, ERROR, reason=e.strerror or str(e), error=e)

        log.info("Renamed %s -> %s", candidate.path, candidate.new_path)
        return RenameResult(candidate, RENAMED)
