# -*- coding: utf-8 -*-
"""Meals domain (daily checklist shared by the host app and the widget)."""
