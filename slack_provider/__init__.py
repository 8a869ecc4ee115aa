# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Slack user resource provider.

Manages Slack workspace users (invite, read, deactivate) as a declarative
``slack_user`` resource.
"""
