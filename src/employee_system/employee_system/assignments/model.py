from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Project:
    project_id: int
    name: str
    dept_id: Optional[int] = None


@dataclass(frozen=True)
class Task:
    task_id: int
    title: str
    project_id: Optional[int] = None
    assignee_id: Optional[int] = None


@dataclass(frozen=True)
class Team:
    team_id: int
    name: str
    dept_id: Optional[int] = None
