from localconnect.repositories.base import MongoRepository


class UserRepository(MongoRepository):
    collection_name = "users"
    duplicate_message = "User already exists"
