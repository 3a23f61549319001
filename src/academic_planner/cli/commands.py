# src/academic_planner/cli/commands.py

from __future__ import annotations

import inspect
import logging
import math
import shlex
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from typing import cast

from ..core.models import Subject, Task, new_subject, new_task
from ..core.snapshot import Snapshot
from ..core.state import AppState
from ..core.task_order import as_aware, sort_tasks
from ..planner import api
from .render import format_attendance, format_subject_line, format_task_line

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /tasks, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError:
            # Unbalanced quotes: fall back to plain whitespace splitting.
            parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- argument helpers ----


def split_options(args: list[str]) -> tuple[list[str], dict[str, str]]:
    """
    Split ["a", "--load", "60", "b", "--yes"] into (["a", "b"], {"load": "60", "yes": ""}).
    An option followed by another option (or nothing) is a flag with value "".
    """
    positional: list[str] = []
    opts: dict[str, str] = {}
    i = 0
    while i < len(args):
        a = args[i]
        if a.startswith("--") and len(a) > 2:
            key = a[2:].lower()
            if i + 1 < len(args) and not args[i + 1].startswith("--"):
                opts[key] = args[i + 1]
                i += 2
                continue
            opts[key] = ""
        else:
            positional.append(a)
        i += 1
    return positional, opts


def parse_course_load(raw: str) -> float | None:
    """'60' -> 60.0, 'none' -> None. Raises ValueError on garbage or negatives."""
    if raw.strip().lower() in ("", "none", "-"):
        return None
    value = float(raw)
    if not math.isfinite(value) or value < 0:
        raise ValueError("course load must be a finite non-negative number")
    return value


def parse_due(raw: str) -> datetime:
    """
    Accept 'YYYY-MM-DD' or a full ISO-8601 date-time.
    Values without an offset are taken as local time.
    """
    return as_aware(datetime.fromisoformat(raw.strip()))


def _resolve(ref: str, items: list, kind: str) -> tuple[object | None, str | None]:
    """Find an item by 1-based list index or by id prefix."""
    if ref.isdigit():
        idx = int(ref)
        if 1 <= idx <= len(items):
            return items[idx - 1], None
        return None, f"No {kind} #{idx}."
    matches = [it for it in items if it.id.startswith(ref)]
    if len(matches) == 1:
        return matches[0], None
    if not matches:
        return None, f"No {kind} matches '{ref}'."
    return None, f"'{ref}' matches {len(matches)} {kind}s; use a longer id."


def find_subject(snapshot: Snapshot, ref: str) -> tuple[Subject | None, str | None]:
    found, err = _resolve(ref, list(snapshot.subjects), "subject")
    return cast(Subject | None, found), err


def find_task(snapshot: Snapshot, ref: str) -> tuple[Task | None, str | None]:
    # Indexes refer to the order shown by /tasks.
    found, err = _resolve(ref, sort_tasks(snapshot.tasks), "task")
    return cast(Task | None, found), err


def _date_format(state: AppState) -> str:
    return str(getattr(state.settings, "date_format", "%d %B %Y"))


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    snap = api.load_snapshot(state)
    path = getattr(state.store, "path", None)
    return (
        "Status:\n"
        f"  Subjects: {len(snap.subjects)}\n"
        f"  Tasks: {len(snap.tasks)}\n"
        f"  Store: {path if path is not None else type(state.store).__name__}"
    )


def cmd_subjects(state: AppState, args: list[str]) -> str:
    snap = api.load_snapshot(state)
    if not snap.subjects:
        return "No subjects yet. Add one with /subject add <name> [--load HOURS] [--color COLOR]."
    lines = ["Subjects:"]
    for i, s in enumerate(snap.subjects, start=1):
        lines.append(f"  {format_subject_line(i, s)}")
    return "\n".join(lines)


_SUBJECT_USAGE = (
    "Usage:\n"
    "  /subject add <name> [--load HOURS] [--color COLOR]\n"
    "  /subject edit <ref> [--name NAME] [--load HOURS|none] [--color COLOR]\n"
    "  /subject rm <ref> --yes"
)


def cmd_subject(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    """
    /subject add <name> [--load H] [--color C]
    /subject edit <ref> [--name N] [--load H|none] [--color C]
    /subject rm <ref> --yes   (also deletes the subject's tasks)
    """
    if not args:
        return _SUBJECT_USAGE

    sub = args[0].lower()
    positional, opts = split_options(args[1:])

    if sub == "add":
        name = " ".join(positional).strip()
        try:
            load = parse_course_load(opts["load"]) if "load" in opts else None
            subject = new_subject(name, color=opts.get("color"), course_load=load)
        except ValueError as e:
            return f"Cannot add subject: {e}."
        api.save_subject(state, subject)
        return f"Subject added: {subject.name} [{subject.id[:8]}]"

    if sub == "edit":
        if not positional:
            return _SUBJECT_USAGE
        subject, err = find_subject(api.load_snapshot(state), positional[0])
        if subject is None:
            return err or "Subject not found."

        changes: dict[str, object] = {}
        if "name" in opts:
            if not opts["name"].strip():
                return "Cannot edit subject: name is required."
            changes["name"] = opts["name"].strip()
        if "color" in opts and opts["color"].strip():
            changes["color"] = opts["color"].strip()
        if "load" in opts:
            try:
                changes["course_load"] = parse_course_load(opts["load"])
            except ValueError as e:
                return f"Cannot edit subject: {e}."
        if not changes:
            return "Nothing to change. " + _SUBJECT_USAGE

        api.save_subject(state, replace(subject, **changes))
        return f"Subject updated: {changes.get('name', subject.name)}"

    if sub in ("rm", "del", "delete"):
        if not positional:
            return _SUBJECT_USAGE
        snap = api.load_snapshot(state)
        subject, err = find_subject(snap, positional[0])
        if subject is None:
            return err or "Subject not found."

        n_tasks = len(snap.tasks_for_subject(subject.id))
        if "yes" not in opts:
            return (
                f"Deleting '{subject.name}' also deletes its {n_tasks} task(s) and absence count. "
                f"Repeat with --yes to confirm."
            )
        if emit is not None:
            emit(f"Deleting '{subject.name}' and {n_tasks} task(s)...")
        api.delete_subject(state, subject.id)
        return f"Subject deleted: {subject.name}"

    return "Unknown /subject subcommand.\n" + _SUBJECT_USAGE


def cmd_absence(state: AppState, args: list[str]) -> str:
    """
    /absence add <ref>  -> one more missed session
    /absence rm <ref>   -> one less (never below zero)
    """
    if len(args) < 2 or args[0].lower() not in ("add", "rm", "+", "-"):
        return "Usage: /absence add <subject> | /absence rm <subject>"

    subject, err = find_subject(api.load_snapshot(state), args[1])
    if subject is None:
        return err or "Subject not found."

    if args[0].lower() in ("add", "+"):
        snap = api.add_absence(state, subject.id)
    else:
        if subject.absences == 0:
            return f"{subject.name} has no absences to remove."
        snap = api.remove_absence(state, subject.id)

    updated = snap.subject(subject.id)
    count = updated.absences if updated is not None else subject.absences
    return f"{subject.name}: {count} absences."


def cmd_attendance(state: AppState, args: list[str]) -> str:
    report = api.get_attendance(state)
    if not report:
        return (
            "No attendance to track yet. "
            "Set a course load with /subject add <name> --load HOURS or /subject edit <ref> --load HOURS."
        )
    return "\n".join(format_attendance(subject, status) for subject, status in report)


def cmd_tasks(state: AppState, args: list[str]) -> str:
    views = api.get_task_views(state)
    if not views:
        return "No tasks yet. Add one with /task add <subject> <due date> <title>."
    fmt = _date_format(state)
    lines = ["Upcoming tasks:"]
    for i, v in enumerate(views, start=1):
        lines.append(f"  {format_task_line(i, v, fmt)}")
    return "\n".join(lines)


_TASK_USAGE = (
    "Usage:\n"
    "  /task add <subject> <YYYY-MM-DD[THH:MM]> <title>\n"
    "  /task edit <ref> [--title TITLE] [--due DATE] [--subject SUBJECT]\n"
    "  /task toggle <ref>\n"
    "  /task rm <ref>"
)


def cmd_task(state: AppState, args: list[str]) -> str:
    if not args:
        return _TASK_USAGE

    sub = args[0].lower()
    positional, opts = split_options(args[1:])
    snap = api.load_snapshot(state)

    if sub == "add":
        if len(positional) < 3:
            return _TASK_USAGE
        subject, err = find_subject(snap, positional[0])
        if subject is None:
            return err or "Subject not found."
        try:
            due = parse_due(positional[1])
            task = new_task(subject.id, " ".join(positional[2:]), due)
        except ValueError as e:
            return f"Cannot add task: {e}."
        api.save_task(state, task)
        return f"Task added: {task.title} [{task.id[:8]}]"

    if not positional:
        return _TASK_USAGE

    task, err = find_task(snap, positional[0])
    if task is None:
        return err or "Task not found."

    if sub == "edit":
        changes: dict[str, object] = {}
        if "title" in opts:
            if not opts["title"].strip():
                return "Cannot edit task: title is required."
            changes["title"] = opts["title"].strip()
        if "due" in opts:
            try:
                changes["due_date"] = parse_due(opts["due"])
            except ValueError as e:
                return f"Cannot edit task: {e}."
        if "subject" in opts:
            subject, err = find_subject(snap, opts["subject"])
            if subject is None:
                return err or "Subject not found."
            changes["subject_id"] = subject.id
        if not changes:
            return "Nothing to change. " + _TASK_USAGE
        api.save_task(state, replace(task, **changes))
        return f"Task updated: {changes.get('title', task.title)}"

    if sub in ("toggle", "done"):
        after = api.toggle_task_status(state, task.id)
        toggled = after.task(task.id)
        status = toggled.status if toggled is not None else task.status
        return f"Task '{task.title}' is now {status.value}."

    if sub in ("rm", "del", "delete"):
        api.delete_task(state, task.id)
        return f"Task deleted: {task.title}"

    return "Unknown /task subcommand.\n" + _TASK_USAGE


def cmd_done(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /done <task>"
    return cmd_task(state, ["toggle", *args])


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show store location and totals.")
registry.register("subjects", cmd_subjects, help_text="List subjects.")
registry.register(
    "subject", cmd_subject, help_text="Manage subjects: /subject add | edit | rm."
)
registry.register(
    "absence", cmd_absence, help_text="Record absences: /absence add <subject> | rm <subject>."
)
registry.register(
    "attendance", cmd_attendance, help_text="Show absence risk per subject.", aliases=["att"]
)
registry.register("tasks", cmd_tasks, help_text="List tasks, earliest due first.")
registry.register(
    "task", cmd_task, help_text="Manage tasks: /task add | edit | toggle | rm."
)
registry.register("done", cmd_done, help_text="Toggle a task between pending and completed.")
