from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator

from coursework.core.clock import as_utc

# Naive input is taken as UTC; aware input is converted to UTC.
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]
