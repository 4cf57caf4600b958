from fastapi import APIRouter, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from typing import List

from jina_reader.core.errors import FetchError, SlashCommandError, UnknownInvocation
from jina_reader.schemas import SlashCommand, SlashCommandRequest, SlashCommandResponse
from jina_reader.services.reader_command import READER_COMMAND, AsyncReaderCommand, get_handler

router = APIRouter()

@router.get("/slash-commands", response_model=List[SlashCommand])
async def list_slash_commands():
    """Commands this extension registers with the host"""
    return [READER_COMMAND]

@router.post("/slash-command", response_model=SlashCommandResponse)
async def run_slash_command(request: SlashCommandRequest):
    """
    Run a slash command.

    In sync mode the response carries the fetched text. In async mode it
    carries a placeholder and an invocation_id to poll.
    """
    handler = get_handler()
    try:
        if isinstance(handler, AsyncReaderCommand):
            invocation_id, output = handler.submit(request.name, request.arguments)
            return SlashCommandResponse(**output.model_dump(), invocation_id=invocation_id)

        output = await run_in_threadpool(handler.handle, request.name, request.arguments)
        return SlashCommandResponse(**output.model_dump())
    except SlashCommandError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except FetchError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e)
        )

@router.get("/slash-command/{invocation_id}", response_model=SlashCommandResponse)
async def get_slash_command_result(invocation_id: str):
    """Current output of a background invocation (placeholder while pending)"""
    handler = get_handler()
    if not isinstance(handler, AsyncReaderCommand):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Background invocations are only available when FETCH_MODE=async"
        )

    try:
        output = handler.retrieve(invocation_id)
        return SlashCommandResponse(**output.model_dump(), invocation_id=invocation_id)
    except UnknownInvocation as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except FetchError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e)
        )

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "Jina Reader Slash Command"}
