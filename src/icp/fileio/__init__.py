from .icp_configuration import \
    ICPConfiguration, \
    load_icp_configuration
