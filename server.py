"""REST API for expenses plus the keyword-based category helpers, served with FastAPI."""

import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import Dict, List, Literal, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.orm import Session

import expense_service as service
from categories import TABLE_VERSION
from classifier import predict_category, prediction_confidence, suggest_amount
from config import Config
from database import get_db, init_db
from insights import compute_category_totals, generate_spending_insight
from logging_setup import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    setup_logging(Config.LOG_LEVEL)
    init_db()
    logger.info("Expense API ready")
    yield


app = FastAPI(title="Expense Tracker API", version="1.0.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.cors_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)

router = APIRouter(prefix="/api/expenses")


# --- Schemas ---

class ExpenseIn(BaseModel):
    category: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0, description="Amount must be greater than 0")
    description: Optional[str] = None
    date: date

    @field_validator("category")
    @classmethod
    def category_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Category is required")
        return value


class ExpenseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    category: str
    amount: float
    description: Optional[str] = None
    date: date


class CurrentMonthResponse(BaseModel):
    expenses: List[ExpenseOut]
    total: float


class CategoryTotalResponse(BaseModel):
    category: str
    total: float


class PredictCategoryRequest(BaseModel):
    description: Optional[str] = None


class PredictCategoryResponse(BaseModel):
    predictedCategory: str
    confidence: int
    suggestedAmount: float
    description: str


class SuggestAmountRequest(BaseModel):
    category: Optional[str] = None


class SuggestAmountResponse(BaseModel):
    suggestedAmount: float
    category: str


class InsightsResponse(BaseModel):
    insight: str
    categoryTotals: Dict[str, float]
    totalSpent: float
    expenseCount: int


# --- Listing & aggregates ---

@router.get("", response_model=List[ExpenseOut])
def list_expenses(db: Session = Depends(get_db)):
    return service.get_all_expenses(db)


@router.post("", response_model=ExpenseOut, status_code=status.HTTP_201_CREATED)
def create_expense(payload: ExpenseIn, db: Session = Depends(get_db)):
    return service.create_expense(
        db,
        category=payload.category,
        amount=payload.amount,
        expense_date=payload.date,
        description=payload.description,
    )


@router.get("/total", response_model=float)
def total_expenses(db: Session = Depends(get_db)):
    return service.get_total_expenses(db)


@router.get("/count", response_model=int)
def expense_count(db: Session = Depends(get_db)):
    return service.get_expense_count(db)


@router.get("/category/{category}", response_model=List[ExpenseOut])
def expenses_by_category(category: str, db: Session = Depends(get_db)):
    return service.get_expenses_by_category(db, category)


@router.get("/category/{category}/total", response_model=CategoryTotalResponse)
def category_total(category: str, db: Session = Depends(get_db)):
    return CategoryTotalResponse(category=category, total=service.get_total_amount_by_category(db, category))


@router.get("/search", response_model=List[ExpenseOut])
def search_expenses(q: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return service.search_expenses_by_description(db, q)


@router.get("/date-range", response_model=List[ExpenseOut])
def expenses_in_date_range(
    start: date,
    end: date,
    category: Optional[str] = None,
    db: Session = Depends(get_db),
):
    if start > end:
        raise HTTPException(status_code=400, detail="start must not be after end")
    if category:
        return service.get_expenses_by_category_and_date_range(db, category, start, end)
    return service.get_expenses_by_date_range(db, start, end)


@router.get("/amount-range", response_model=List[ExpenseOut])
def expenses_in_amount_range(
    min_amount: float = Query(0.0, alias="min", ge=0),
    max_amount: Optional[float] = Query(None, alias="max", ge=0),
    db: Session = Depends(get_db),
):
    if max_amount is None:
        return service.get_expenses_greater_than(db, min_amount) if min_amount > 0 else service.get_all_expenses(db)
    if min_amount > max_amount:
        raise HTTPException(status_code=400, detail="min must not exceed max")
    return service.get_expenses_in_amount_range(db, min_amount, max_amount)


@router.get("/current-month", response_model=CurrentMonthResponse)
def current_month(db: Session = Depends(get_db)):
    expenses = service.get_current_month_expenses(db)
    return CurrentMonthResponse(expenses=expenses, total=float(sum(e.amount for e in expenses)))


@router.get("/sorted", response_model=List[ExpenseOut])
def sorted_expenses(by: Literal["date", "amount"] = "date", db: Session = Depends(get_db)):
    if by == "amount":
        return service.get_expenses_ordered_by_amount(db)
    return service.get_expenses_ordered_by_date(db)


@router.get("/date/{expense_date}", response_model=List[ExpenseOut])
def expenses_on_date(expense_date: date, db: Session = Depends(get_db)):
    return service.get_expenses_by_date(db, expense_date)


# --- Category helpers ---

@router.post("/ai/predict-category", response_model=PredictCategoryResponse)
def predict_expense_category(req: PredictCategoryRequest):
    # An empty description is valid and predicts "Other"; only a missing field is rejected.
    if req.description is None:
        return JSONResponse(status_code=400, content={"error": "Description is required"})

    category = predict_category(req.description)
    confidence = prediction_confidence(req.description, category)
    logger.debug("Predicted %s (%d) for %r", category, confidence, req.description)
    return PredictCategoryResponse(
        predictedCategory=category,
        confidence=confidence,
        suggestedAmount=suggest_amount(category),
        description=req.description,
    )


@router.post("/ai/suggest-amount", response_model=SuggestAmountResponse)
def suggest_expense_amount(req: SuggestAmountRequest):
    if req.category is None or not req.category.strip():
        return JSONResponse(status_code=400, content={"error": "Category is required"})

    return SuggestAmountResponse(suggestedAmount=suggest_amount(req.category), category=req.category)


@router.get("/ai/insights", response_model=InsightsResponse)
def spending_insights(db: Session = Depends(get_db)):
    expenses = service.get_all_expenses(db)
    category_totals, total_spent = compute_category_totals(service.expenses_to_df(expenses))
    return InsightsResponse(
        insight=generate_spending_insight(category_totals, total_spent),
        categoryTotals=category_totals,
        totalSpent=total_spent,
        expenseCount=len(expenses),
    )


# --- Single expense (declared last so the static paths above win) ---

@router.get("/{expense_id}", response_model=ExpenseOut)
def get_expense(expense_id: int, db: Session = Depends(get_db)):
    expense = service.get_expense_by_id(db, expense_id)
    if expense is None:
        logger.warning("Expense %s not found", expense_id)
        raise HTTPException(status_code=404, detail="Expense not found")
    return expense


@router.put("/{expense_id}", response_model=ExpenseOut)
def update_expense(expense_id: int, payload: ExpenseIn, db: Session = Depends(get_db)):
    expense = service.update_expense(db, expense_id, **payload.model_dump())
    if expense is None:
        logger.warning("Expense %s not found for update", expense_id)
        raise HTTPException(status_code=404, detail="Expense not found")
    return expense


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(expense_id: int, db: Session = Depends(get_db)):
    if not service.delete_expense(db, expense_id):
        logger.warning("Expense %s not found for delete", expense_id)
        raise HTTPException(status_code=404, detail="Expense not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


app.include_router(router)


@app.get("/api/hello")
async def hello():
    return "Hello! The expense tracker API is up."


@app.get("/api/")
async def home():
    return "Expense tracker API is running."


@app.get("/health")
async def health():
    return {"status": "ok", "categoryTableVersion": TABLE_VERSION}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server:app", host=Config.API_HOST, port=Config.API_PORT, reload=True)
