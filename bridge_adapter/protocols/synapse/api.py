"""
Synapse Bridge Contract Addresses and Constants

Provides contract addresses for the bridge, zap and fee-oracle contracts
on every supported chain.
"""

# =========================================================================
# SynapseBridge Contracts
# =========================================================================

SYNAPSE_BRIDGE_ADDRESSES = {
    1: "0x2796317b0fF8538F253012862c06787Adfb8cEb6",            # Ethereum Mainnet
    10: "0xAf41a65F786339e7911F4acDAD6BD49426F2Dc6b",           # Optimism
    56: "0xd123f70AE324d34A9E76b67a27bf77593bA8749f",           # BSC
    137: "0x8F5BBB2BB8c2Ee94639E55d5F41de9b4839C1280",          # Polygon
    250: "0xAf41a65F786339e7911F4acDAD6BD49426F2Dc6b",          # Fantom
    288: "0x432036208d2717394d2614d6697c46DF3Ed69540",          # Boba
    1284: "0x84A420459cd31C3c34583F67E0f0fB191067D32f",         # Moonbeam
    1285: "0xaeD5b25BE1c3163c907a471082640450F928DDFE",         # Moonriver
    42161: "0x6F4e8eBa4D337f874Ab57478AcC2Cb5BACdc19c9",        # Arbitrum
    43114: "0xC05e61d0E7a63D27546389B7aD62FdFf5A91aACE",        # Avalanche
    1666600000: "0xAf41a65F786339e7911F4acDAD6BD49426F2Dc6b",   # Harmony
}

# =========================================================================
# Bridge Zap Contracts
# =========================================================================

# Ethereum uses the L1 zap (liquidity add/remove on the nUSD pool)
L1_BRIDGE_ZAP_ADDRESS = "0x6571d6be3d8460CF5F7d6711Cd9961860029D85F"

# Every other chain uses an L2 zap (swap pools around nUSD / nETH)
L2_BRIDGE_ZAP_ADDRESSES = {
    10: "0x470f9522ff620eE45DF86C58E54E6A645fE3b4A7",           # Optimism
    56: "0x749F37Df06A99D6A8E065dd065f8cF947ca23697",           # BSC
    137: "0x1c6aE197fF4BF7BA96c66C5FD64Cb22450aF9cC8",          # Polygon
    250: "0x1c6aE197fF4BF7BA96c66C5FD64Cb22450aF9cC8",          # Fantom
    288: "0x64B4097bCCD27D49BC2A081984C39C3EeC427a2d",          # Boba
    1284: "0x73783F028c21D8DDDd7F3aD5B9F40C7B3e24B09f",         # Moonbeam
    1285: "0x06Fea8513FF03a0d3f61324da709D4cf06F42A5c",         # Moonriver
    42161: "0x37f9aE2e0Ea6742b9CAD5AbCfB6bBC3475b3862B",        # Arbitrum
    43114: "0x0EF812f4c68DC84c22A4821EF30ba2ffAB9C2f3A",        # Avalanche
    1666600000: "0x1c6aE197fF4BF7BA96c66C5FD64Cb22450aF9cC8",   # Harmony
}

BRIDGE_ZAP_ADDRESSES = {1: L1_BRIDGE_ZAP_ADDRESS, **L2_BRIDGE_ZAP_ADDRESSES}

# =========================================================================
# Fee Oracle
# =========================================================================

# BridgeConfigV3 lives on Ethereum and prices fees for every destination
BRIDGE_CONFIG_ADDRESS = "0x5217c83ca75559B1f8a8803824E5b7ac233A12a1"
BRIDGE_CONFIG_CHAIN_ID = 1

# Fee oracle works in 18-decimal units regardless of token decimals
FEE_ORACLE_DECIMALS = 18

# Chains with a bridge deployment
SYNAPSE_SUPPORTED_CHAINS = sorted(SYNAPSE_BRIDGE_ADDRESSES.keys())


def bridge_address(chain_id: int):
    return SYNAPSE_BRIDGE_ADDRESSES.get(chain_id)


def zap_address(chain_id: int):
    return BRIDGE_ZAP_ADDRESSES.get(chain_id)
