from fastapi import HTTPException, status

from pomotask.schemas.command import CommandResult

STATUS_BY_KIND = {
    "validation": status.HTTP_409_CONFLICT,
    "not_found": status.HTTP_404_NOT_FOUND,
    "storage": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "internal": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def unwrap(result: CommandResult):
    """Valeur du résultat, ou HTTPException avec le message tel quel"""
    if not result.ok:
        code = STATUS_BY_KIND.get(result.error_kind, status.HTTP_400_BAD_REQUEST)
        raise HTTPException(status_code=code, detail=result.message)
    return result.value
