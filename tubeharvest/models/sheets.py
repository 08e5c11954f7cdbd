from pydantic import BaseModel


class ReadRangeResponse(BaseModel):
    spreadsheet_id: str
    range: str
    values: list[list[str]]


class WriteRangeResponse(BaseModel):
    spreadsheet_id: str
    updated_range: str
    updated_rows: int
    updated_columns: int
    updated_cells: int
