"""Service layer — operations over the content corpus.

Every public method returns a :class:`~postctl.services.result.ServiceResult`.
"""
