"""
Database Schemas

MongoDB collection schemas and API response bodies, defined as Pydantic models.
These schemas are used for data validation in your application.

Each record model represents a collection in your database.
Model name is converted to lowercase for the collection name:
- Transaction -> "transaction" collection
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Union
from datetime import datetime


# Record stored in the "transaction" collection
class Transaction(BaseModel):
    title: str = Field(..., description="Product title")
    description: Optional[str] = Field(None, description="Product description")
    price: float = Field(..., description="Sale price")
    category: Optional[str] = Field(None, description="Category label")
    dateOfSale: datetime = Field(..., description="Timestamp of the sale")
    sold: bool = Field(False, description="Whether the item was sold")


class TransactionOut(Transaction):
    id: str


# ---------- Responses ----------
class Pagination(BaseModel):
    totalRecords: int
    currentPage: int
    perPage: int
    totalPages: int


class TransactionPage(BaseModel):
    transactions: List[TransactionOut]
    pagination: Pagination


class Statistics(BaseModel):
    totalSaleAmount: Union[int, float] = 0
    totalSoldItems: int = 0
    totalUnsoldItems: int = 0


class RangeCount(BaseModel):
    range: str
    count: int


class BarChart(BaseModel):
    rangeCounts: List[RangeCount]


class CategoryCount(BaseModel):
    category: str
    count: int


class PieChart(BaseModel):
    categoryCounts: List[CategoryCount]


class CombinedData(BaseModel):
    statistics: Statistics
    barChart: BarChart
    pieChart: PieChart


class InitializeResult(BaseModel):
    message: str
    totalRecords: int
