from vmlicense.cloud.azure.azure import Azure
from vmlicense.cloud.cloud import ICloud
from vmlicense.config import RelicenseConfig


class CloudFactory:
    config: RelicenseConfig

    def __init__(self, config: RelicenseConfig):
        self.config = config

    def get_cloud(self) -> ICloud:
        cloud = Azure(self.config.subscription_id,
                      interactive_login=self.config.interactive_login,
                      api_version=self.config.api_version)

        return cloud
