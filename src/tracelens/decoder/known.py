"""Signatures available without any registry lookup.

Named parameters matter: the DeFi detector reads `path`, `amountIn` and
`amountOut` by name, which registry signatures (bare types) cannot provide.
"""

COMMON_FUNCTIONS: list[str] = [
    # ERC-20
    "transfer(address to,uint256 amount)",
    "approve(address spender,uint256 amount)",
    "transferFrom(address from,address to,uint256 amount)",
    # WETH
    "deposit()",
    "withdraw(uint256 wad)",
    # Uniswap V2 Router02
    "swapExactTokensForTokens(uint256 amountIn,uint256 amountOutMin,address[] path,address to,uint256 deadline)",
    "swapTokensForExactTokens(uint256 amountOut,uint256 amountInMax,address[] path,address to,uint256 deadline)",
    "swapExactETHForTokens(uint256 amountOutMin,address[] path,address to,uint256 deadline)",
    "swapTokensForExactETH(uint256 amountOut,uint256 amountInMax,address[] path,address to,uint256 deadline)",
    "swapExactTokensForETH(uint256 amountIn,uint256 amountOutMin,address[] path,address to,uint256 deadline)",
    "swapETHForExactTokens(uint256 amountOut,address[] path,address to,uint256 deadline)",
    "addLiquidity(address tokenA,address tokenB,uint256 amountADesired,uint256 amountBDesired,"
    "uint256 amountAMin,uint256 amountBMin,address to,uint256 deadline)",
    "removeLiquidity(address tokenA,address tokenB,uint256 liquidity,uint256 amountAMin,"
    "uint256 amountBMin,address to,uint256 deadline)",
]

COMMON_EVENTS: list[str] = [
    "Transfer(address indexed from,address indexed to,uint256 value)",
    "Approval(address indexed owner,address indexed spender,uint256 value)",
    "Deposit(address indexed dst,uint256 wad)",
    "Withdrawal(address indexed src,uint256 wad)",
    # Uniswap V2 pair
    "Swap(address indexed sender,uint256 amount0In,uint256 amount1In,uint256 amount0Out,"
    "uint256 amount1Out,address indexed to)",
    "Sync(uint112 reserve0,uint112 reserve1)",
]
