#!/usr/bin/env python3
"""
Database Seed Script
Populate test data into the database

Features:
1. Create Users - one administrator and one regular user
2. Create Sessions - a few upcoming sessions across languages and levels

Registration never grants the admin role, so the administrator only exists
through this script (or a direct database update).
"""

import asyncio
from dataclasses import dataclass
from datetime import date, timedelta

from sqlalchemy import text
import uuid_utils

from src.platform.database.orm_db_setting import dispose_engine, get_session_maker
from src.service.session_booking.domain.entity.session_entity import Session
from src.service.session_booking.domain.entity.user_entity import UserEntity, UserRole
from src.service.session_booking.domain.enum import Language, Level
from src.service.session_booking.driven_adapter.repo.session_command_repo_impl import (
    SessionCommandRepoImpl,
)
from src.service.session_booking.driven_adapter.repo.user_command_repo_impl import (
    UserCommandRepoImpl,
)
from src.service.session_booking.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)


DEFAULT_PASSWORD = 'Passw0rdOk'


@dataclass
class UserConfig:
    email: str
    name: str
    role: UserRole


@dataclass
class SessionConfig:
    language: Language
    level: Level | None
    days_ahead: int
    time: str
    location: str
    total_seats: int
    price: float


TEST_USERS = [
    UserConfig(email='admin@booking.test', name='Admin', role=UserRole.ADMIN),
    UserConfig(email='user@booking.test', name='Camille Martin', role=UserRole.USER),
]

TEST_SESSIONS = [
    SessionConfig(Language.ENGLISH, Level.B2, 7, '09:00', 'Salle 101, Campus Nord', 20, 45.0),
    SessionConfig(Language.SPANISH, Level.A2, 10, '14:30', 'Salle 204, Campus Nord', 12, 30.0),
    SessionConfig(Language.GERMAN, None, 14, '10:00', 'Amphi B, Campus Sud', 40, 0.0),
    SessionConfig(Language.JAPANESE, Level.C1, 21, '18:00', 'Salle 12, Campus Sud', 1, 60.0),
]


async def create_users() -> None:
    print(f'👥 Creating {len(TEST_USERS)} users...')

    user_repo = UserCommandRepoImpl(get_session_maker())
    password_hasher = BcryptPasswordHasher()

    for config in TEST_USERS:
        user = UserEntity(email=config.email, name=config.name, role=config.role, is_active=True)
        user.set_password(DEFAULT_PASSWORD, password_hasher)
        created = await user_repo.create(user_entity=user)
        print(f'   ✅ Created {config.role}: ID={created.id}, Email={created.email}')

    print(f'   📧 Credentials: {DEFAULT_PASSWORD}')


async def create_sessions() -> None:
    print(f'🗓️ Creating {len(TEST_SESSIONS)} sessions...')

    session_repo = SessionCommandRepoImpl(get_session_maker())
    today = date.today()

    for config in TEST_SESSIONS:
        session = Session.create(
            id=uuid_utils.uuid7(),
            language=config.language,
            level=config.level,
            date=today + timedelta(days=config.days_ahead),
            time=config.time,
            location=config.location,
            total_seats=config.total_seats,
            price=config.price,
        )
        created = await session_repo.create(session=session)
        print(f'   ✅ Created session: {created.language} {created.date} {created.time}')


async def verify_data() -> None:
    print('🔍 Verifying seeded data...')

    async with get_session_maker()() as session:
        for table in ['user', 'session', 'booking']:
            result = await session.execute(text(f'SELECT COUNT(*) FROM "{table}"'))
            print(f'   {table.capitalize()} count: {result.scalar()}')


async def main() -> None:
    print('🌱 Starting data seeding...')
    print('=' * 50)

    try:
        await create_users()
        await create_sessions()
        await verify_data()
        print('=' * 50)
        print('✅ Data seeding completed!')
    finally:
        await dispose_engine()


if __name__ == '__main__':
    asyncio.run(main())
