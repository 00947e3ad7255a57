from decimal import Decimal
from typing import Annotated

from pydantic import PlainSerializer

# Credit amounts are Decimal internally and plain JSON numbers on the wire
Credits = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
