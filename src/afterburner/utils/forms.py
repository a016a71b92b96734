"""Validation of submitted HTML forms against pydantic schemas."""

import logging
from typing import TypeVar

from fastapi import Request
from pydantic import ValidationError

from afterburner.schemas.forms import FormModel

logger = logging.getLogger(__name__)

FormT = TypeVar("FormT", bound=FormModel)


async def parse_form(
    request: Request,
    schema: type[FormT],
    multi_valued: tuple[str, ...] = (),
) -> FormT | None:
    """Validate the request's form body.

    Fields named in ``multi_valued`` are read as lists (e.g. a multiple
    select). Returns None when validation fails.
    """
    form = await request.form()
    data: dict[str, object] = {key: value for key, value in form.items() if key not in multi_valued}
    for key in multi_valued:
        data[key] = form.getlist(key)

    try:
        return schema.model_validate(data)
    except ValidationError as e:
        logger.debug("Rejected %s: %s", schema.__name__, e.errors())
        return None
