from fastapi import APIRouter, Depends

from pomotask.schemas.task import AdvanceResponse
from pomotask.services.commands import TaskCommands, get_task_commands
from pomotask.routers.common import unwrap

router = APIRouter(prefix="/pomodoro", tags=["pomodoro"])


@router.post("/check", response_model=AdvanceResponse)
def check_sessions(commands: TaskCommands = Depends(get_task_commands)):
    # poll manuel ; le poller de fond fait la même chose
    return AdvanceResponse(advanced_task_ids=unwrap(commands.check_pomodoro_sessions()))
