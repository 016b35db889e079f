# app/api/deps.py
from fastapi import Depends
from app.db.mongo import get_db
from app.db.redis import get_redis
from app.domain.repositories.order_repo import OrderRepo
from app.domain.repositories.product_repo import ProductRepo
from app.domain.services.notifications import LoggingNotificationDispatcher

# Dependency for injecting the MongoDB database into endpoints/services
async def mongo_db(db = Depends(get_db)):
    return db

# Dependency for injecting the Redis client (may be None)
def redis_dep():
    return get_redis()

def product_repo_dep(db = Depends(mongo_db)) -> ProductRepo:
    return ProductRepo(db)

def order_repo_dep(db = Depends(mongo_db)) -> OrderRepo:
    return OrderRepo(db)

def notifier_dep():
    return LoggingNotificationDispatcher()
