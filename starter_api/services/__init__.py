"""
Services module for business logic.

- crud/: generic building blocks (sorting, paging, strategy, bridge, repository)
- base_service.py: GenericService, the transactional CRUD orchestration
- domain/: entity services built on GenericService - USE THESE

Usage:
    from starter_api.services.domain import UserService
    service = UserService(db)
    users = service.find_all(parse_sort("username,ASC"))
"""
