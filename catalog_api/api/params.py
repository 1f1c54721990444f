from typing import Annotated

from fastapi import Path

from catalog_api.schemas import MAX_INT

CategoryId = Annotated[int, Path(ge=1, le=MAX_INT)]
ProductId = Annotated[int, Path(ge=1, le=MAX_INT)]
SkuId = Annotated[int, Path(ge=1, le=MAX_INT)]
