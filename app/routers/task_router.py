# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import Optional
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.auth import get_db, get_current_user
from app.models.account import AuthAccount
from app.models.task import Task
from app.schemas.task_schemas import TaskCreateRequest, TaskUpdateRequest
from app.services import audit_logger
from app.services.audit_logger import TRACKED_TASK_FIELDS, compute_task_changes

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["Tasks"])

SECTIONS = ("active", "finished", "archived", "all")


def serialize_task(task: Task) -> dict:
    return {
        "id": task.id,
        "user_id": task.user_id,
        "title": task.title,
        "description": task.description,
        "due_date": task.due_date.isoformat() if task.due_date else None,
        "due_time": task.due_time.isoformat() if task.due_time else None,
        "is_completed": task.is_completed,
        "is_archived": task.is_archived,
        "section": task.section,
        "created_at": task.created_at.isoformat() if task.created_at else None,
    }


def get_owned_task(db: Session, account: AuthAccount, task_id: int) -> Task:
    # Other users' tasks look exactly like missing ones
    task = db.query(Task).filter(Task.id == task_id, Task.user_id == account.id).first()
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


def _commit_or_500(db: Session, what: str):
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"🛑 Failed to {what}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to {what}")


@router.get("")
def list_tasks(
    section: Optional[str] = Query("all"),
    account: AuthAccount = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    if section not in SECTIONS:
        raise HTTPException(status_code=400, detail=f"Unknown section '{section}'")

    query = db.query(Task).filter(Task.user_id == account.id)
    if section == "active":
        query = query.filter(Task.is_completed == False, Task.is_archived == False)  # noqa: E712
    elif section == "finished":
        query = query.filter(Task.is_completed == True, Task.is_archived == False)  # noqa: E712
    elif section == "archived":
        query = query.filter(Task.is_archived == True)  # noqa: E712

    tasks = query.order_by(Task.created_at.desc(), Task.id.desc()).all()
    return [serialize_task(task) for task in tasks]


@router.post("", status_code=201)
def create_task(
    payload: TaskCreateRequest,
    background_tasks: BackgroundTasks,
    account: AuthAccount = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    task = Task(
        user_id=account.id,
        title=payload.title,
        description=payload.description,
        due_date=payload.due_date,
        due_time=payload.due_time,
    )
    db.add(task)
    _commit_or_500(db, "create task")
    db.refresh(task)

    background_tasks.add_task(audit_logger.log_create_task, account.id, task.id, task.title)
    return serialize_task(task)


@router.patch("/{task_id}")
def edit_task(
    task_id: int,
    payload: TaskUpdateRequest,
    background_tasks: BackgroundTasks,
    account: AuthAccount = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    task = get_owned_task(db, account, task_id)
    if task.is_archived:
        raise HTTPException(status_code=409, detail="Archived tasks can't change")
    before = {field: getattr(task, field) for field in TRACKED_TASK_FIELDS}

    for field, value in payload.model_dump(exclude_unset=True).items():
        if field == "title" and value is None:
            continue  # a task always keeps a title
        setattr(task, field, value)

    _commit_or_500(db, "update task")
    db.refresh(task)

    after = {field: getattr(task, field) for field in TRACKED_TASK_FIELDS}
    changes = compute_task_changes(before, after)
    background_tasks.add_task(audit_logger.log_edit_task, account.id, task.id, task.title, changes)

    return {**serialize_task(task), "changes": changes}


@router.post("/{task_id}/finish")
def finish_task(
    task_id: int,
    background_tasks: BackgroundTasks,
    account: AuthAccount = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    task = get_owned_task(db, account, task_id)
    if task.is_archived:
        raise HTTPException(status_code=409, detail="Archived tasks can't change")

    task.is_completed = True
    _commit_or_500(db, "finish task")
    db.refresh(task)

    background_tasks.add_task(audit_logger.log_finish_task, account.id, task.id, task.title)
    return serialize_task(task)


@router.post("/{task_id}/archive")
def archive_task(
    task_id: int,
    background_tasks: BackgroundTasks,
    account: AuthAccount = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    # Completion is not required; archived is terminal
    task = get_owned_task(db, account, task_id)
    task.is_archived = True
    _commit_or_500(db, "archive task")
    db.refresh(task)

    background_tasks.add_task(audit_logger.log_archive_task, account.id, task.id, task.title)
    return serialize_task(task)
