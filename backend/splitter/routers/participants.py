"""Participants: list, add, remove."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from splitter.database import get_db
from splitter.errors import DuplicateParticipant, InvalidInput, NotFound, ReferentialConstraint, RepositoryFailure
from splitter.repository import ExpenseRepository
from splitter.schemas import ParticipantCreate, ParticipantResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/participants", tags=["participants"])


@router.get("", response_model=list[ParticipantResponse])
def list_participants(db: Session = Depends(get_db)):
    try:
        participants = ExpenseRepository(db).list_participants()
    except RepositoryFailure:
        raise HTTPException(status_code=503, detail="Failed to load participants. Please try again.")
    return [ParticipantResponse.model_validate(p) for p in participants]


@router.post("", response_model=ParticipantResponse)
def create_participant(data: ParticipantCreate, db: Session = Depends(get_db)):
    try:
        participant = ExpenseRepository(db).create_participant(data.name)
    except DuplicateParticipant as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except RepositoryFailure:
        raise HTTPException(status_code=503, detail="Failed to add participant. Please try again.")
    logger.info("Added participant %s (%s)", participant.id, participant.name)
    return ParticipantResponse.model_validate(participant)


@router.delete("/{participant_id}", status_code=204)
def delete_participant(
    participant_id: int,
    confirm: bool = Query(False),
    db: Session = Depends(get_db),
):
    repo = ExpenseRepository(db)
    try:
        participant = repo.get_participant(participant_id)
        if not confirm:
            raise HTTPException(
                status_code=400,
                detail=f"Are you sure you want to remove {participant.name}? Repeat with confirm=true.",
            )
        repo.delete_participant(participant_id)
    except NotFound:
        raise HTTPException(status_code=404, detail="Participant not found")
    except ReferentialConstraint as exc:
        logger.warning("Refused to delete participant %s: still referenced", participant_id)
        raise HTTPException(status_code=409, detail=str(exc))
    except RepositoryFailure:
        raise HTTPException(status_code=503, detail="Failed to delete participant. Please try again.")
    logger.info("Deleted participant %s", participant_id)
