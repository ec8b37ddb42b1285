from datetime import date
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status

from pomotask.schemas.task import (
    TaskCreate,
    TaskResponse,
    TaskWithSessions,
    TaskStatus,
    RemainingTimeResponse,
)
from pomotask.services.commands import TaskCommands, get_task_commands
from pomotask.services.time_accounting import seconds_to_duration, format_duration
from pomotask.routers.common import unwrap

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=List[TaskResponse])
def list_tasks(
    status_filter: Optional[TaskStatus] = Query(None, alias="status"),
    commands: TaskCommands = Depends(get_task_commands)
):
    """Toutes les tâches, triées par date prévue puis création"""
    return unwrap(commands.load_tasks(status_filter))


@router.get("/with-sessions", response_model=List[TaskWithSessions])
def list_tasks_with_sessions(commands: TaskCommands = Depends(get_task_commands)):
    return unwrap(commands.load_tasks_with_sessions())


@router.get("/today", response_model=List[TaskResponse])
def today(
    day: Optional[date] = Query(None),
    active_only: bool = Query(False),
    commands: TaskCommands = Depends(get_task_commands)
):
    return unwrap(commands.get_today_tasks(today=day, active_only=active_only))


@router.get("/by-status", response_model=Dict[str, List[TaskResponse]])
def by_status(commands: TaskCommands = Depends(get_task_commands)):
    return unwrap(commands.tasks_grouped_by_status())


@router.get("/active", response_model=Optional[TaskResponse])
def active(commands: TaskCommands = Depends(get_task_commands)):
    return unwrap(commands.get_active_task())


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(task_data: TaskCreate, commands: TaskCommands = Depends(get_task_commands)):
    """Crée la tâche et son cycle Pomodoro"""
    return unwrap(commands.add_task(
        name=task_data.name,
        owner=task_data.owner,
        estimated_hours=task_data.estimated_hours,
        scheduled_date=task_data.scheduled_date,
        description=task_data.description,
        end_date=task_data.end_date,
    ))


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: int, commands: TaskCommands = Depends(get_task_commands)):
    return unwrap(commands.get_task(task_id))


@router.post("/{task_id}/start", status_code=status.HTTP_204_NO_CONTENT)
def start_task(
    task_id: int,
    force: bool = Query(False),
    commands: TaskCommands = Depends(get_task_commands)
):
    """
    Démarre la tâche.

    Si une autre tâche tourne déjà : 409, sauf avec force=true (l'autre passe en pause).
    """
    unwrap(commands.start_task(task_id, force=force))


@router.post("/{task_id}/pause", status_code=status.HTTP_204_NO_CONTENT)
def pause_task(task_id: int, commands: TaskCommands = Depends(get_task_commands)):
    unwrap(commands.pause_task(task_id))


@router.post("/{task_id}/resume", status_code=status.HTTP_204_NO_CONTENT)
def resume_task(task_id: int, commands: TaskCommands = Depends(get_task_commands)):
    unwrap(commands.resume_task(task_id))


@router.post("/{task_id}/complete", status_code=status.HTTP_204_NO_CONTENT)
def complete_task(task_id: int, commands: TaskCommands = Depends(get_task_commands)):
    unwrap(commands.complete_task(task_id))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: int, commands: TaskCommands = Depends(get_task_commands)):
    unwrap(commands.delete_task(task_id))


@router.get("/{task_id}/remaining-time", response_model=RemainingTimeResponse)
def remaining_time(task_id: int, commands: TaskCommands = Depends(get_task_commands)):
    seconds = unwrap(commands.get_task_remaining_time(task_id))
    duration = seconds_to_duration(seconds)
    return RemainingTimeResponse(
        task_id=task_id,
        remaining_seconds=seconds,
        duration=duration,
        display=format_duration(duration),
    )
