# SPDX-FileCopyrightText: 2025-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: vendorhub
"""
vendorhub: vendor onboarding workflow and vendor registry.
"""

__version__ = "0.1.0"
