from fastapi import HTTPException
from uuid import UUID
from starlette import status


class CashFlowError(HTTPException):
    """Exceção base para erros relacionados aos fluxos de caixa"""

    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)


class CashFlowNotFoundError(CashFlowError):
    def __init__(self, cash_flow_id: UUID | str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Fluxo de caixa com ID {cash_flow_id} não encontrado.",
        )


class CashFlowCreationError(CashFlowError):
    def __init__(self, details: str = ""):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Erro ao criar fluxo de caixa: {details}",
        )


class CashFlowUpdateError(CashFlowError):
    def __init__(self, details: str = ""):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Erro ao atualizar fluxo de caixa: {details}",
        )


class CashFlowQueryParamsError(CashFlowError):
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Informe exatamente um entre ID, data, descrição exata e descrição aproximada",
        )


class CashFlowDateRangeError(CashFlowError):
    def __init__(self, reason: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Intervalo de datas inválido: {reason}",
        )


class CashFlowDeleteParamsError(CashFlowError):
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Informe apenas um entre ID e data para excluir fluxos de caixa",
        )
