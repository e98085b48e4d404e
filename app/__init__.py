"""Wallet notification service package.

Only ``app`` and the packages carrying an ``__init__`` are regular packages;
the layer directories (``domain``, ``application``, ``infrastructure`` and
``interfaces``) resolve as namespace packages beneath it.
"""
