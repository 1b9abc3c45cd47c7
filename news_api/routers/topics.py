from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.database import get_db
from news_api.schemas import TopicCreate, TopicEnvelope, TopicListEnvelope
from news_api.services import topic_service

router = APIRouter(prefix="/api/topics", tags=["topics"])


@router.get("", response_model=TopicListEnvelope)
async def list_topics(db: AsyncSession = Depends(get_db)):
    return {"topics": await topic_service.list_topics(db)}


@router.post("", status_code=201, response_model=TopicEnvelope)
async def create_topic(data: TopicCreate, db: AsyncSession = Depends(get_db)):
    return {"topic": await topic_service.create_topic(db, data)}
