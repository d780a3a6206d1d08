"""
Bridge token registry

Token metadata for every asset the bridge can carry: per-chain addresses and
decimals, the pool family (swap type) a token trades in, and the mint/burn
and wrapped flags that decide whether pool math applies.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .chains import Chain, ChainId, ETH_NATIVE_CHAINS, chain_id_of


class SwapType(Enum):
    """Pool family a token trades in; tokens only bridge within a family"""
    USD = "USD"
    ETH = "ETH"
    AVAX = "AVAX"
    MOVR = "MOVR"
    SYN = "SYN"
    HIGH = "HIGH"
    DOG = "DOG"
    FRAX = "FRAX"
    GMX = "GMX"
    NFD = "NFD"
    JUMP = "JUMP"
    SOLAR = "SOLAR"


# Native gas token placeholder address
NATIVE_TOKEN_ADDRESS = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"

ChainLike = Union[Chain, int]


@dataclass(frozen=True, eq=False)
class Token:
    """
    Bridge token information

    Equality and hashing are by logical id only; the same token has a
    different address on every chain.

    Attributes:
        id: Stable logical identifier (e.g., "nusd")
        symbol: Token symbol (e.g., "nUSD")
        name: Full token name
        swap_type: Pool family
        addresses: Contract address per chain ID
        decimals: Decimals per chain ID (falls back to default_decimals)
        default_decimals: Decimals where no per-chain override exists
        is_mint_burn: Bridged 1:1 by minting/burning, no pool math
        is_wrapped_token: 1:1 wrapper around underlying_token
        underlying_token: Back-reference to the wrapped asset
        wrapper_addresses: Per-chain wrapper contract used by the bridge
        is_native: Naked gas token (ETH, AVAX, MOVR)
    """
    id: str
    symbol: str
    name: str
    swap_type: SwapType
    addresses: Dict[int, str] = field(default_factory=dict)
    decimals: Dict[int, int] = field(default_factory=dict)
    default_decimals: int = 18
    is_mint_burn: bool = False
    is_wrapped_token: bool = False
    underlying_token: Optional["Token"] = field(default=None, repr=False)
    wrapper_addresses: Dict[int, str] = field(default_factory=dict)
    is_native: bool = False

    def __eq__(self, other) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return self.symbol

    def __repr__(self) -> str:
        return f"Token({self.symbol}, {self.swap_type.value})"

    def address(self, chain: ChainLike) -> Optional[str]:
        """Contract address on a chain, None if not deployed there"""
        return self.addresses.get(chain_id_of(chain))

    def decimals_on(self, chain: ChainLike) -> int:
        return self.decimals.get(chain_id_of(chain), self.default_decimals)

    def wrapper_address(self, chain: ChainLike) -> Optional[str]:
        return self.wrapper_addresses.get(chain_id_of(chain))

    def is_on(self, chain: ChainLike) -> bool:
        return chain_id_of(chain) in self.addresses

    def ui_amount(self, raw_amount: int, chain: ChainLike) -> Decimal:
        """Convert raw amount to UI amount using the chain's decimals"""
        return Decimal(raw_amount) / Decimal(10 ** self.decimals_on(chain))

    def raw_amount(self, ui_amount: Union[Decimal, float, int, str], chain: ChainLike) -> int:
        """Convert UI amount to raw amount using the chain's decimals"""
        if not isinstance(ui_amount, Decimal):
            ui_amount = Decimal(str(ui_amount))
        return int(ui_amount * Decimal(10 ** self.decimals_on(chain)))


def _native_on(chain_ids: Iterable[int]) -> Dict[int, str]:
    return {chain_id: NATIVE_TOKEN_ADDRESS for chain_id in chain_ids}


# =============================================================================
# Token catalog
# =============================================================================

class Tokens:
    """Catalog of bridgeable tokens"""

    # Bridge assets
    NUSD = Token(
        "nusd", "nUSD", "Synapse nUSD", SwapType.USD,
        addresses={
            ChainId.ETH: "0x1B84765dE8B7566e4cEAF4D0fD3c5aF52D3DdE4F",
            ChainId.OPTIMISM: "0x67C10C397dD0Ba417329543c1a40eb48AAa7cd00",
            ChainId.BSC: "0x23b891e5C62E0955ae2bD185990103928Ab817b3",
            ChainId.POLYGON: "0xB6c473756050dE474286bED418B77Aeac39B02aF",
            ChainId.FANTOM: "0xED2a7edd7413021d440b09D654f3b87712abAB66",
            ChainId.BOBA: "0x6B4712AE9797C199edd44F897cA09BC57628a1CF",
            ChainId.ARBITRUM: "0x2913E812Cf0dcCA30FB28E6Cac3d2DCFF4497688",
            ChainId.AVALANCHE: "0xCFc37A6AB183dd4aED08C204D1c2773c0b1BDf46",
            ChainId.HARMONY: "0xED2a7edd7413021d440b09D654f3b87712abAB66",
        },
    )

    NETH = Token(
        "neth", "nETH", "Synapse nETH", SwapType.ETH,
        addresses={
            ChainId.OPTIMISM: "0x809DC529f07651bD43A172e8dB6f4a7a0d771036",
            ChainId.FANTOM: "0x67C10C397dD0Ba417329543c1a40eb48AAa7cd00",
            ChainId.BOBA: "0x96419929d7949D6A801A6909c145C8EEf6A40431",
            ChainId.ARBITRUM: "0x3ea9B0ab55F34Fb188824Ee288CeaEfC63cf908e",
            ChainId.AVALANCHE: "0x19E1ae0eE35c0404f835521146206595d37981ae",
            ChainId.HARMONY: "0x0b5740c6b4a97f90eF2F0220651Cca420B868FfB",
        },
    )

    # Stablecoins
    USDC = Token(
        "usdc", "USDC", "USD Coin", SwapType.USD,
        addresses={
            ChainId.ETH: "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
            ChainId.OPTIMISM: "0x7F5c764cBc14f9669B88837ca1490cCa17c31607",
            ChainId.BSC: "0x8AC76a51cc950d9822D68b83fE1Ad97B32Cd580d",
            ChainId.POLYGON: "0x2791Bca1f2de4661ED88A30C99A7a9449Aa84174",
            ChainId.FANTOM: "0x04068DA6C83AFCFA0e13ba15A6696662335D5B75",
            ChainId.BOBA: "0x66a2A913e447d6b4BF33EFbec43aAeF87890FBbc",
            ChainId.ARBITRUM: "0xFF970A61A04b1cA14834A43f5dE4533eBDDB5CC8",
            ChainId.AVALANCHE: "0xA7D7079b0FEaD91F3e65f86E8915Cb59c1a4C664",
            ChainId.HARMONY: "0x985458E523dB3d53125813eD68c274899e9DfAb4",
        },
        decimals={ChainId.BSC: 18},  # BSC USDC has 18 decimals
        default_decimals=6,
    )

    USDT = Token(
        "usdt", "USDT", "Tether USD", SwapType.USD,
        addresses={
            ChainId.ETH: "0xdAC17F958D2ee523a2206206994597C13D831ec7",
            ChainId.BSC: "0x55d398326f99059fF775485246999027B3197955",
            ChainId.POLYGON: "0xc2132D05D31c914a87C6611C10748AEb04B58e8F",
            ChainId.BOBA: "0x5DE1677344D3Cb0D7D465c10b72A8f60699C062d",
            ChainId.ARBITRUM: "0xFd086bC7CD5C481DCC9C85ebE478A1C0b69FCbb9",
            ChainId.AVALANCHE: "0xc7198437980c041c805A1EDcbA50c1Ce5db95118",
            ChainId.HARMONY: "0x3C2B8Be99c50593081EAA2A724F0B8285F5aba8f",
        },
        decimals={ChainId.BSC: 18},  # BSC USDT has 18 decimals
        default_decimals=6,
    )

    DAI = Token(
        "dai", "DAI", "Dai Stablecoin", SwapType.USD,
        addresses={
            ChainId.ETH: "0x6B175474E89094C44Da98b954EedeaC495271d0F",
            ChainId.POLYGON: "0x8f3Cf7ad23Cd3CaDbD9735AFf958023239c6A063",
            ChainId.BOBA: "0xf74195Bb8a5cf652411867c5C2C5b8C2a402be35",
            ChainId.AVALANCHE: "0xd586E7F844cEa2F87f50152665BCbc2C279D8d70",
            ChainId.HARMONY: "0xEf977d2f931C1978Db5F6747666fa1eACB0d0339",
        },
    )

    BUSD = Token(
        "busd", "BUSD", "Binance USD", SwapType.USD,
        addresses={ChainId.BSC: "0xe9e7CEA3DedcA5984780Bafc599bD69ADd087D56"},
    )

    # ETH family
    ETH = Token(
        "eth", "ETH", "Ethereum", SwapType.ETH,
        addresses=_native_on(sorted(ETH_NATIVE_CHAINS)),
        is_native=True,
    )

    WETH = Token(
        "weth", "WETH", "Wrapped ETH", SwapType.ETH,
        addresses={
            ChainId.ETH: "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
            ChainId.OPTIMISM: "0x121ab82b49B2BC4c7901CA46B8277962b4350204",
            ChainId.BOBA: "0xd203De32170130082896b4111eDF825a4774c18E",
            ChainId.ARBITRUM: "0x82aF49447D8a07e3bd95BD0d56f35241523fBab1",
        },
    )

    WETH_E = Token(
        "weth_e", "WETH.e", "Wrapped Ether (Avalanche bridge)", SwapType.ETH,
        addresses={ChainId.AVALANCHE: "0x49D5c2BdFfac6CE2BFdB6640F4F80f226bc10bAB"},
    )

    FTM_ETH = Token(
        "ftm_eth", "ETH", "Wrapped ETH (Fantom)", SwapType.ETH,
        addresses={ChainId.FANTOM: "0x74b23882a30290451A17c44f4F05243b6b58C76d"},
    )

    ONE_ETH = Token(
        "one_eth", "1ETH", "Ethereum (Harmony)", SwapType.ETH,
        addresses={ChainId.HARMONY: "0x6983D1E6DEf3690C4d616b13597A09e6193EA013"},
    )

    AVWETH = Token(
        "avweth", "AVWETH", "Aave Wrapped ETH", SwapType.ETH,
        addresses={ChainId.AVALANCHE: "0x53f7c5869a859F0AeC3D334ee8B4Cf01E3492f21"},
        is_wrapped_token=True,
        underlying_token=WETH_E,
    )

    # AVAX / MOVR families
    AVAX = Token(
        "avax", "AVAX", "Avalanche", SwapType.AVAX,
        addresses={ChainId.AVALANCHE: NATIVE_TOKEN_ADDRESS},
        is_native=True,
    )

    WAVAX = Token(
        "wavax", "WAVAX", "Wrapped AVAX", SwapType.AVAX,
        addresses={
            ChainId.AVALANCHE: "0xB31f66AA3C1e785363F0875A1B74E27b85FD66c7",
            ChainId.MOONBEAM: "0xA1f8890E39b4d8E33efe296D698fe42Fb5e59cC3",
        },
        is_mint_burn=True,
    )

    MOVR = Token(
        "movr", "MOVR", "Moonriver", SwapType.MOVR,
        addresses={ChainId.MOONRIVER: NATIVE_TOKEN_ADDRESS},
        is_native=True,
    )

    WMOVR = Token(
        "wmovr", "WMOVR", "Wrapped MOVR", SwapType.MOVR,
        addresses={
            ChainId.MOONRIVER: "0x98878B06940aE243284CA214f92Bb71a2b032B8A",
            ChainId.MOONBEAM: "0x1d4C2a246311bB9f827F4C768e277FF5787B7D7E",
        },
        is_mint_burn=True,
    )

    # Mint/burn assets
    SYN = Token(
        "syn", "SYN", "Synapse", SwapType.SYN,
        addresses={
            ChainId.ETH: "0x0f2D719407FdBeFF09D87557AbB7232601FD9F29",
            ChainId.OPTIMISM: "0x5A5fFf6F753d7C11A56A52FE47a177a87e431655",
            ChainId.BSC: "0xa4080f1778e69467E905B8d6F72f6e441f9e9484",
            ChainId.POLYGON: "0xf8F9efC0db77d8881500bb06FF5D6ABc3070E695",
            ChainId.FANTOM: "0xE55e19Fb4F2D85af758950957714292DAC1e25B2",
            ChainId.BOBA: "0xb554A55358fF0382Fb21F0a478C3546d1106Be8c",
            ChainId.MOONBEAM: "0xF44938b0125A6662f9536281aD2CD6c499F22004",
            ChainId.MOONRIVER: "0xd80d8688b02B3FD3afb81cDb124F188BB5aD0445",
            ChainId.ARBITRUM: "0x080F6AEd32Fc474DD5717105Dba5ea57268F46eb",
            ChainId.AVALANCHE: "0x1f1E7c893855525b303f99bDF5c3c05Be09ca251",
            ChainId.HARMONY: "0xE55e19Fb4F2D85af758950957714292DAC1e25B2",
        },
        is_mint_burn=True,
    )

    HIGH = Token(
        "high", "HIGH", "Highstreet", SwapType.HIGH,
        addresses={
            ChainId.ETH: "0x71Ab77b7dbB4fa7e017BC15090b2163221420282",
            ChainId.BSC: "0x5f4Bde007Dc06b867f86EBFE4802e34A1fFEEd63",
        },
        is_mint_burn=True,
    )

    DOG = Token(
        "dog", "DOG", "The Doge NFT", SwapType.DOG,
        addresses={
            ChainId.ETH: "0xBAac2B4491727D78D2b78815144570b9f2Fe8899",
            ChainId.BSC: "0xaA88C603d142C371eA0eAC8756123c5805EdeE03",
            ChainId.POLYGON: "0x43A8cab15D06d3a5fE5854D714C37E7E9246F170",
        },
        is_mint_burn=True,
    )

    FRAX = Token(
        "frax", "FRAX", "Frax", SwapType.FRAX,
        addresses={
            ChainId.ETH: "0x853d955aCEf822Db058eb8505911ED77F175b99e",
            ChainId.BSC: "0x88918495892BAF4536611E38E75D771Dc6Ec0863",
            ChainId.POLYGON: "0x48A34796653aFdAA1647986b33544C911578e767",
            ChainId.FANTOM: "0x1852F70512298d56e9c8FDd905e02581E04ddb2a",
            ChainId.MOONBEAM: "0xDd47A348AB60c61Ad6B60cA8C31ea5e00eBfAB4F",
            ChainId.MOONRIVER: "0xE96AC70907ffF3Efee79f502C985A7A21Bce407d",
            ChainId.ARBITRUM: "0x85662fd123280827e11C59973Ac9fcBE838dC3B4",
            ChainId.AVALANCHE: "0xcc5672600B948dF4b665d9979357bEF3af56B300",
            ChainId.HARMONY: "0x1852F70512298d56e9c8FDd905e02581E04ddb2a",
        },
        is_mint_burn=True,
    )

    GMX = Token(
        "gmx", "GMX", "GMX", SwapType.GMX,
        addresses={
            ChainId.ARBITRUM: "0xfc5A1A6EB076a2C7aD06eD22C90d7E710E35ad0a",
            ChainId.AVALANCHE: "0x62edc0692BD897D2295872a9FFCac5425011c661",
        },
        wrapper_addresses={
            ChainId.AVALANCHE: "0x20A9DC684B4d0407EF8C9A302BEAaA18ee15F656",
        },
        is_mint_burn=True,
    )

    NFD = Token(
        "nfd", "NFD", "Feisty Doge NFT", SwapType.NFD,
        addresses={
            ChainId.BSC: "0x0FE9778c005a5A6115cBE12b0568a2d50b765A51",
            ChainId.POLYGON: "0x0A5926027d407222F8fe20f24cB16e103f617046",
            ChainId.AVALANCHE: "0xf1293574EE43950E7a8c9F1005Ff097A9A713959",
        },
        is_mint_burn=True,
    )

    JUMP = Token(
        "jump", "JUMP", "HyperJump", SwapType.JUMP,
        addresses={
            ChainId.BSC: "0x130025eE738A66E691E6A7a62381CB33c6d9Ae83",
            ChainId.FANTOM: "0x78DE9326792ce1d6eCA0c978753c6953Cdeedd73",
        },
        is_mint_burn=True,
    )

    SOLAR = Token(
        "solar", "veSOLAR", "Vested SolarBeam", SwapType.SOLAR,
        addresses={
            ChainId.MOONBEAM: "0x0DB6729C03C85B0708166cA92801BcB5CAc781fC",
            ChainId.MOONRIVER: "0x76906411D07815491A5E577022757aD941fb5066",
        },
        is_mint_burn=True,
    )

    @classmethod
    def all(cls) -> Tuple[Token, ...]:
        return tuple(v for v in vars(cls).values() if isinstance(v, Token))


# ERC20 representations of ETH on chains whose gas token is not ETH
ETH_LIKE_TOKENS: Tuple[Token, ...] = (Tokens.WETH_E, Tokens.FTM_ETH, Tokens.ONE_ETH)


class TokenRegistry:
    """
    Lookup over the token catalog

    Loaded once; every accessor is a read.
    """

    def __init__(self, tokens: Optional[Iterable[Token]] = None):
        self._tokens: Dict[str, Token] = {}
        for token in tokens if tokens is not None else Tokens.all():
            self._tokens[token.id] = token

    def __contains__(self, token: Token) -> bool:
        return token.id in self._tokens

    def __len__(self) -> int:
        return len(self._tokens)

    def by_id(self, token_id: str) -> Optional[Token]:
        return self._tokens.get(token_id)

    def by_symbol(self, symbol: str, chain: Optional[ChainLike] = None) -> Optional[Token]:
        """
        Find a token by symbol (case-insensitive)

        Several catalog entries can share a symbol (ETH and FTM_ETH), so
        passing a chain restricts the match to tokens deployed there.
        """
        symbol = symbol.upper()
        for token in self._tokens.values():
            if token.symbol.upper() != symbol:
                continue
            if chain is None or token.is_on(chain):
                return token
        return None

    def by_address(self, address: str, chain: ChainLike) -> Optional[Token]:
        address = address.lower()
        for token in self._tokens.values():
            token_address = token.address(chain)
            if token_address and token_address.lower() == address:
                return token
        return None

    def address_on(self, token: Token, chain: ChainLike) -> Optional[str]:
        return token.address(chain)

    def decimals_on(self, token: Token, chain: ChainLike) -> int:
        return token.decimals_on(chain)

    def tokens_on(self, chain: ChainLike) -> List[Token]:
        return [t for t in self._tokens.values() if t.is_on(chain)]

    def supports(self, chain: ChainLike, token: Token) -> bool:
        """Check if a token is registered and deployed on a chain"""
        return token in self and token.is_on(chain)
