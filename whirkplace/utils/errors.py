# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.


class CheckinError(Exception):
    """
    Base class for check-in business errors.
    Each subclass carries the HTTP status and user-facing message the API renders.
    """
    status_code = 400
    default_message = "Check-in request could not be processed."

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidDateError(CheckinError):
    status_code = 400
    default_message = "Invalid date. Use YYYY-MM-DD."


class ValidationError(CheckinError):
    status_code = 422
    default_message = "Check-in data is invalid."


class DuplicateSubmissionError(CheckinError):
    status_code = 409
    default_message = "You have already submitted a check-in for this week."


class AlreadyReviewedError(CheckinError):
    status_code = 409
    default_message = "This check-in has already been reviewed."


class CheckinNotFoundError(CheckinError):
    status_code = 404
    default_message = "Check-in not found."


class CommentNotFoundError(CheckinError):
    status_code = 404
    default_message = "Comment not found."


class PermissionDeniedError(CheckinError):
    status_code = 403
    default_message = "You are not allowed to do this."


class QuestionNotFoundError(CheckinError):
    status_code = 404
    default_message = "Question not found."
