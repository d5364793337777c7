"""Errors raised while creating an ECS server group."""


class DeploymentConfigurationError(RuntimeError):
    """The service spec or account setup cannot be deployed as given."""


class TrustRelationshipError(DeploymentConfigurationError):
    """A task role is not trusted by the ECS tasks service principal."""


class TargetGroupNotFoundError(DeploymentConfigurationError):
    """No target group matches the requested name."""


class AmbiguousTargetGroupError(DeploymentConfigurationError):
    """More than one target group matches the requested name."""


class UnsupportedCredentialsError(DeploymentConfigurationError):
    """The credentials cannot be turned into an assumed role ARN."""


class AlarmNotFoundError(DeploymentConfigurationError):
    """A CloudWatch alarm named by the service spec does not exist."""
