from fastapi import HTTPException


class CategoryError(HTTPException):
    """Exceção base para erros relacionados às categorias"""

    pass


class CategoryNotFoundError(CategoryError):
    def __init__(self, category_id=None, name: str | None = None):
        if name is not None:
            message = f"Categoria '{name}' não encontrada"
        elif category_id is not None:
            message = f"Categoria de ID {category_id} não encontrada"
        else:
            message = "Categoria não encontrada"
        super().__init__(status_code=404, detail=message)


class CategoryParentNotFoundError(CategoryError):
    def __init__(self, parent_id):
        super().__init__(
            status_code=404, detail=f"Categoria pai de ID {parent_id} não encontrada"
        )


class CategoryAlreadyExistsError(CategoryError):
    def __init__(self, name: str):
        super().__init__(
            status_code=409, detail=f"Já existe uma categoria com o nome {name}."
        )


class CategoryCreationError(CategoryError):
    def __init__(self, error: str):
        super().__init__(
            status_code=500, detail=f"Falha na criação da categoria: {error}"
        )


class CategoryUpdateError(CategoryError):
    def __init__(self, error: str):
        super().__init__(
            status_code=400, detail=f"Falha na atualização da categoria: {error}"
        )


class CategoryInUseError(CategoryError):
    def __init__(self, reason: str):
        super().__init__(
            status_code=409, detail=f"Não é possível excluir a categoria: {reason}"
        )


class CategoryDeleteParamsError(CategoryError):
    def __init__(self):
        super().__init__(
            status_code=400,
            detail="Informe apenas um entre ID e nome para excluir a categoria",
        )
