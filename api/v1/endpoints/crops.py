# api/v1/endpoints/crops.py
from fastapi import APIRouter, Depends, HTTPException
from typing import List

from agents.knowledge.models import Crop
from agents.knowledge.store import KnowledgeStore
from api.deps import get_knowledge_store

router = APIRouter()

@router.get("", response_model=List[Crop])
async def get_crops(store: KnowledgeStore = Depends(get_knowledge_store)):
    """All crops derived from the ontology"""
    return store.all_crops()

@router.get("/{name}", response_model=Crop)
async def get_crop(name: str, store: KnowledgeStore = Depends(get_knowledge_store)):
    """One crop by name (case-insensitive)"""
    crop = store.crop_by_name(name.strip())
    if crop is None:
        raise HTTPException(status_code=404, detail=f"Unknown crop: {name}")
    return crop
