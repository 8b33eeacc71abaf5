"""Pinned versions written into ``package.json`` by the installers.

Any package missing from this map is written as ``"latest"``.
"""

from __future__ import annotations

DEFAULT_VERSION = "latest"

DEPENDENCY_VERSION_MAP: dict[str, str] = {
    # NextAuth.js
    "next-auth": "5.0.0-beta.25",
    "@auth/prisma-adapter": "^2.7.2",
    "@auth/drizzle-adapter": "^1.7.2",

    # Firebase
    "firebase": "^11.1.0",
    "firebase-admin": "^13.0.2",
    "firebase-tools": "^13.29.1",
    "cookies-next": "^5.0.2",
    "jsonwebtoken": "^9.0.2",
    "@types/jsonwebtoken": "^9.0.7",

    # Prisma
    "prisma": "^6.5.0",
    "@prisma/client": "^6.5.0",
    "@prisma/adapter-planetscale": "^6.5.0",

    # Drizzle
    "drizzle-kit": "^0.30.5",
    "drizzle-orm": "^0.41.0",
    "eslint-plugin-drizzle": "^0.2.3",
    "mysql2": "^3.11.0",
    "@planetscale/database": "^1.19.0",
    "postgres": "^3.4.4",
    "@libsql/client": "^0.14.0",

    # Tailwind CSS
    "tailwindcss": "^4.0.15",
    "postcss": "^8.5.3",
    "@tailwindcss/postcss": "^4.0.15",

    # tRPC
    "@trpc/client": "^11.0.0",
    "@trpc/server": "^11.0.0",
    "@trpc/react-query": "^11.0.0",
    "@trpc/next": "^11.0.0",
    "@tanstack/react-query": "^5.69.0",
    "superjson": "^2.2.1",
    "server-only": "^0.0.1",

    # Environment variables
    "@t3-oss/env-nextjs": "^0.12.0",
    "zod": "^3.24.2",

    # Linting / formatting
    "eslint": "^9.23.0",
    "eslint-config-next": "^15.2.3",
    "typescript-eslint": "^8.27.0",
    "@eslint/eslintrc": "^3.3.1",
    "prettier": "^3.5.3",
    "prettier-plugin-tailwindcss": "^0.6.11",
    "@biomejs/biome": "1.9.4",
}
